#!/usr/bin/env python3
"""
Dyno replay tool for recorded GPS speed logs
Feeds a raw sample log through the dyno engine and prints the power/loss report
"""

import argparse
import sys

from constants import DynoConstants
from calibration import CalibrationConfig
from analyzer import DynoAnalyzer


def main(argv=None):
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description='Replay a GPS speed log through the dyno engine',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Basic usage with default calibration
  dyno-replay race-gps-raw-data.csv
  
  # Custom vehicle calibration
  dyno-replay log.csv --weight 1134 --speed-at-3000 112 --cx 0.31 --frontal-surface 1.9
  
  # Log with time already in hundredths of a second, tabular output
  dyno-replay log.csv --time-format hundredths --debug
        """
    )
    
    # Required arguments
    parser.add_argument('csv_file', help='Path to CSV sample log')
    
    # Calibration
    parser.add_argument('--weight', type=float, default=DynoConstants.DEFAULT_WEIGHT_KG, 
                       help='Vehicle weight including driver in kg (default: %(default)s)')
    parser.add_argument('--speed-at-3000', type=float, default=DynoConstants.DEFAULT_SPEED_AT_3000_RPM, 
                       help='Road speed in km/h at 3000 RPM in the measured gear (default: %(default)s)')
    parser.add_argument('--cx', type=float, default=DynoConstants.DEFAULT_DRAG_COEFFICIENT, 
                       help='Aerodynamic drag coefficient (default: %(default)s)')
    parser.add_argument('--frontal-surface', type=float, default=DynoConstants.DEFAULT_FRONTAL_SURFACE, 
                       help='Vehicle frontal surface in m² (default: %(default)s)')
    parser.add_argument('--wheel-loss', type=float, default=DynoConstants.DEFAULT_WHEEL_LOSS, 
                       help='Wheel loss coefficient, KM per (km/h)² (default: %(default)s)')
    parser.add_argument('--air-density', type=float, default=DynoConstants.DEFAULT_AIR_DENSITY, 
                       help='Air density in kg/m³ (default: %(default)s)')
    
    # Analysis parameters
    parser.add_argument('--min-records', type=int, default=DynoConstants.DEFAULT_MINIMUM_RECORDS_TO_MEASURE, 
                       help='Consecutive samples needed to commit to a power or loss run (default: %(default)s)')
    parser.add_argument('--time-format', choices=['gps', 'hundredths'], default='gps', 
                       help='Time column format: packed HHMMSScc clock or hundredths of a second (default: gps)')
    
    # Output options
    parser.add_argument('--debug', action='store_true', help='Output tabular power curve data instead of the report')
    parser.add_argument('--debug-speed-increment', type=float, default=5, 
                       help='Speed increment in km/h for debug mode output (default: 5)')
    
    args = parser.parse_args(argv)
    
    calibration = CalibrationConfig(
        weight_kg=args.weight,
        speed_at_3000_rpm_kmh=args.speed_at_3000,
        drag_coefficient=args.cx,
        frontal_surface_m2=args.frontal_surface,
        wheel_loss_coefficient=args.wheel_loss,
        air_density=args.air_density
    )
    
    try:
        analyzer = DynoAnalyzer(
            calibration=calibration,
            minimum_records_to_measure=args.min_records,
            time_format=args.time_format
        )
        
        analyzer.load_data(args.csv_file)
        analyzer.replay()
        
        if args.debug:
            print(analyzer.generate_debug_output(args.debug_speed_increment))
        else:
            print(analyzer.generate_report())
        
        if not analyzer.power_records:
            print(f"Try lowering --min-records (currently {args.min_records})")
            
    except Exception as e:
        print(f"Error: {e}")
        return 1
    
    return 0


if __name__ == "__main__":
    sys.exit(main())
