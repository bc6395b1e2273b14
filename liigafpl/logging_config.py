"""Logging setup for the autoscorer CLI."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    run_name: str = 'autoscorer',
) -> logging.Logger:
    """
    Configure the 'liigafpl' logger for one CLI run.

    The console gets messages at `level`. When `log_dir` is given, a
    file named after the run (e.g. game_3_20260412_181500.log) also
    records DEBUG messages, which include every substitution decision,
    so a finalized game can be audited afterwards.

    Returns:
        The configured 'liigafpl' logger
    """
    logger = logging.getLogger('liigafpl')
    logger.handlers = []
    logger.setLevel(logging.DEBUG if log_dir is not None else level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f'{run_name}_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                '%(asctime)s %(name)s %(levelname)s %(message)s', datefmt='%Y-%m-%d %H:%M:%S'
            )
        )
        logger.addHandler(file_handler)

    return logger
