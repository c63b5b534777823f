"""
hfprop command line interface

Examples:
    hfprop fetch foF2 --station JR055 --latest
    hfprop --muf-distance 100 fetch MUFD
    hfprop toa 1200                # latest hmF2 from the default station
    hfprop distance 30 --hmf2 280  # offline, fixed hmF2
    hfprop characteristics
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .common.config import HFPropConfig, get_config
from .common.constants import CHARACTERISTICS
from .common.errors import HFPropError
from .common.logging_config import setup_logging, ServiceLogger
from .ingestion.giro_client import GIROClient
from .propagation.geometry import distance_for_take_off_angle, take_off_angle
from .propagation.propagation_service import PropagationService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='hfprop',
        description='GIRO ionosonde data and single-hop HF take-off angle geometry'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--config', help='Path to configuration file')
    parser.add_argument('--log-level', default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level')
    parser.add_argument('--station', help='URSI station code (default from config)')
    parser.add_argument('--muf-distance', type=float,
                        help='Reference distance in km for the MUFD characteristic')
    parser.add_argument('--insecure', action='store_true',
                        help='Do not verify TLS certificates')

    subparsers = parser.add_subparsers(dest='command', required=True)

    fetch = subparsers.add_parser('fetch', help='Fetch a characteristic')
    fetch.add_argument('characteristic', help='Characteristic name, e.g. foF2')
    fetch.add_argument('--hours', type=float, help='Trailing window length in hours')
    fetch.add_argument('--latest', action='store_true', help='Only print the latest value')

    toa = subparsers.add_parser('toa', help='Take-off angle for a ground distance')
    toa.add_argument('distance', type=float, help='Distance in km')
    toa.add_argument('--hmf2', type=float, help='Use this hmF2 (km) instead of fetching')

    distance = subparsers.add_parser('distance', help='Ground distance for a take-off angle')
    distance.add_argument('toa', type=float, help='Take-off angle in degrees')
    distance.add_argument('--hmf2', type=float, help='Use this hmF2 (km) instead of fetching')

    subparsers.add_parser('characteristics', help='List known characteristics')

    return parser


def build_client(args: argparse.Namespace, config: HFPropConfig) -> GIROClient:
    client = GIROClient(config=config.giro)

    if args.station:
        client.set_default_station(args.station)
    if args.muf_distance is not None:
        client.set_distance_for_muf(args.muf_distance)
    if args.insecure:
        client.set_verify_tls(False)

    return client


def run(args: argparse.Namespace, config: HFPropConfig) -> None:
    if args.command == 'characteristics':
        for name, description in CHARACTERISTICS.items():
            print(f"{name:8s} {description}")
        return

    if args.command in ('toa', 'distance') and args.hmf2 is not None:
        if args.command == 'toa':
            print(f"{take_off_angle(args.distance, args.hmf2):.2f}")
        else:
            print(f"{distance_for_take_off_angle(args.toa, args.hmf2):.0f}")
        return

    client = build_client(args, config)

    if args.command == 'fetch':
        if args.hours is not None:
            client.config.window_hours = args.hours

        if args.latest:
            latest = client.fetch_latest(args.characteristic)
            print(f"{latest.characteristic} = {latest.value}")
            return

        series = client.fetch_series(args.characteristic)
        for m in series:
            print(f"{m.timestamp.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3]}Z {m.characteristic} {m.value}")
        return

    service = PropagationService(client=client)
    if args.command == 'toa':
        print(f"{service.toa_by_distance(args.distance):.2f}")
    else:
        print(f"{service.distance_by_toa(args.toa):.0f}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = get_config(args.config)
    setup_logging(
        service_name="hfprop",
        log_level=args.log_level or config.logging.level,
        log_file=config.logging.log_file,
        json_format=config.logging.json_format
    )
    logger = ServiceLogger("hfprop", "main")

    try:
        run(args, config)
    except HFPropError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
