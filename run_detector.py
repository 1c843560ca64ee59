"""
Power and loss run detection logic
"""

from enum import Enum

from constants import DynoConstants
from records import RecordStatus, RecordStore


class SegmentationPhase(Enum):
    SEEKING_POWER = "seeking power"
    IN_POWER = "in power"
    SEEKING_LOSS = "seeking loss"
    IN_LOSS = "in loss"
    LOSS_CLOSED = "loss closed"


class RunDetector:
    """
    Labels the acceleration (power) and coast-down (loss) runs of a session

    The detector is stepped once per appended record. It counts consecutive
    same-direction records and only commits to a phase once the run reaches
    ``minimum_records_to_measure``, then labels the whole run retroactively.
    A committed phase is sealed as soon as its run breaks and is never
    reopened. The loss run is only searched for after the power run is sealed.
    """

    def __init__(self, minimum_records_to_measure: int = DynoConstants.DEFAULT_MINIMUM_RECORDS_TO_MEASURE):
        self.minimum_records_to_measure = minimum_records_to_measure
        self.reset()

    def reset(self) -> None:
        self.power_run_length = 0
        self.power_started = False
        self.power_ended = False
        self.loss_run_length = 0
        self.loss_started = False
        self.loss_ended = False

    @property
    def phase(self) -> SegmentationPhase:
        if not self.power_started:
            return SegmentationPhase.SEEKING_POWER
        if not self.power_ended:
            return SegmentationPhase.IN_POWER
        if not self.loss_started:
            return SegmentationPhase.SEEKING_LOSS
        if not self.loss_ended:
            return SegmentationPhase.IN_LOSS
        return SegmentationPhase.LOSS_CLOSED

    def update(self, records: RecordStore) -> None:
        """Advance the detector after a record was appended to ``records``"""
        if not (self.power_started and self.power_ended):
            self._parse_power_records(records)

        if self.power_started and self.power_ended:
            self._parse_loss_records(records)

    def _parse_power_records(self, records: RecordStore) -> None:
        previous = records.second_to_last

        if previous is not None and previous.increment:
            self.power_run_length += 1
            self.loss_run_length = 0
        else:
            self.power_run_length = 0

        if not self.power_ended and self.power_run_length >= self.minimum_records_to_measure:
            if not self.power_started:
                print(f"Power run started: {self.power_run_length} increasing samples at record {len(records) - 1}")
            self.power_started = True
            self._label(records, self.power_run_length + 1, RecordStatus.POWER)

        if self.power_started and self.power_run_length < self.minimum_records_to_measure:
            self.power_ended = True
            print(f"Power run sealed at record {len(records) - 1}")

    def _parse_loss_records(self, records: RecordStore) -> None:
        previous = records.second_to_last

        if previous is not None and previous.decrement:
            self.loss_run_length += 1
        else:
            self.loss_run_length = 0

        if not self.loss_ended and self.loss_run_length >= self.minimum_records_to_measure:
            if not self.loss_started:
                print(f"Loss run started: {self.loss_run_length} decreasing samples at record {len(records) - 1}")
            self.loss_started = True
            self._label(records, self.loss_run_length, RecordStatus.LOSS)

        if self.loss_started and not self.loss_ended and self.loss_run_length < self.minimum_records_to_measure:
            self.loss_ended = True
            print(f"Loss run sealed at record {len(records) - 1}")

    @staticmethod
    def _label(records: RecordStore, count: int, status: RecordStatus) -> None:
        # A record keeps the first phase it was given
        for record in records.tail(count):
            if record.status is RecordStatus.UNSET:
                record.status = status
