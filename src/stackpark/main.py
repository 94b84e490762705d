"""
Main application entry point for the Stack Parking Garage
Wires configuration, logging, the garage aggregate, the event bus and the
application service, and can run a short demonstration session.
"""

from typing import List, Optional
import argparse
import logging
import os
import sys

from pydantic import ValidationError

from .config import GarageConfig
from .domain.aggregates import ParkingGarage
from .domain.models import COMPACT_TIME_FORMAT
from .infrastructure.messaging import EventBus, LoggingEventHandler
from .application.garage_service import GarageService


def setup_logging(level: int = logging.INFO, log_dir: Optional[str] = None) -> logging.Logger:
    """Setup application logging configuration"""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(os.path.join(log_dir, 'stackpark.log')))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )
    return logging.getLogger(__name__)


class GarageApplication:
    """Application controller that sets up all components"""

    def __init__(self, config: GarageConfig):
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)
        self.setup_components()

    def setup_components(self) -> None:
        """Initialize all application components with dependency injection"""
        self.event_bus = EventBus()
        self.event_bus.subscribe_all(LoggingEventHandler())
        self.garage = ParkingGarage(capacity=self.config.capacity)
        self.service = GarageService(self.garage, self.event_bus)
        self.logger.info(f"Garage ready with capacity {self.config.capacity}")

    def run_demo(self) -> None:
        """Park a few vehicles, take one out of the middle and print the state"""
        for plate, code in (("12GA3456", 1), ("34NA7890", 2), ("56DA1234", 3)):
            result = self.service.park_by_code(plate, code)
            print(f"park {plate}: {result.message}")

        result = self.service.exit_vehicle(2)
        print(f"exit slot 2: {result.message} (fee {result.fee})")

        status = self.service.get_status()
        print(f"occupancy {status.current_count}/{status.capacity}, {status.remaining_space} free")
        for line in status.occupants:
            print(f"  {line}")

        for record in self.garage.entry_records() + self.garage.exit_records():
            print(f"  {record.format_for_report(COMPACT_TIME_FORMAT)}")

        stats = self.service.get_daily_stats()
        print(f"entries: {stats.entry_count} | exits: {stats.exit_count} | revenue: {stats.revenue:,}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Single-lane stack parking garage")
    parser.add_argument("--capacity", type=int, help="Garage capacity (default from STACKPARK_CAPACITY or 10)")
    parser.add_argument("--log-level", help="Logging level (default INFO)")
    parser.add_argument("--log-dir", help="Write stackpark.log into this directory")
    parser.add_argument("--demo", action="store_true", help="Run a short demonstration session")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application"""
    args = build_parser().parse_args(argv)
    try:
        config = GarageConfig.from_env(
            capacity=args.capacity,
            log_level=args.log_level,
            log_dir=args.log_dir
        )
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    logger = setup_logging(config.numeric_log_level, config.log_dir)
    try:
        app = GarageApplication(config)
        if args.demo:
            app.run_demo()
    except Exception as e:
        logger.error(f"Fatal error in main: {str(e)}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
