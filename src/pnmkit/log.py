import argparse
import logging


class Log:
    LEVELS = ['debug', 'info', 'warning', 'error']

    _logger = logging.getLogger('pnmkit')

    @staticmethod
    def add_args(parser: argparse.ArgumentParser):
        parser.add_argument('--log-level', type=str, default='info', choices=Log.LEVELS, help='Logging level')

    @staticmethod
    def setup(args):
        level = getattr(logging, args.log_level.upper())
        logging.basicConfig(level=level, format='%(asctime)s [%(levelname)s] %(name)s: %(message)s')
        Log._logger.setLevel(level)

    @staticmethod
    def debug(message: str):
        Log._logger.debug(message)

    @staticmethod
    def info(message: str):
        Log._logger.info(message)

    @staticmethod
    def warning(message: str):
        Log._logger.warning(message)

    @staticmethod
    def error(message: str):
        Log._logger.error(message)
