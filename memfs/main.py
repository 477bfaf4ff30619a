#!/usr/bin/env python3
"""
memfs - An in-memory filesystem with a Unix-style shell

This is the main entry point for memfs.

Start-up sequence:
1. Parse command-line arguments
2. Load configuration
3. Initialize logging
4. Initialize the virtual filesystem
5. Run the shell (interactive or from a script)

Author: YSNRFD
Version: 1.0.0
"""

import argparse
import sys
from typing import List, Optional

from memfs import __version__
from memfs.core.config_loader import ConfigLoader
from memfs.exceptions import ConfigException
from memfs.logger import Logger, LogLevel, get_logger
from memfs.shell.shell import create_shell


def build_parser() -> argparse.ArgumentParser:
    """Command-line interface of the ``memfs`` program."""
    parser = argparse.ArgumentParser(
        prog='memfs',
        description='In-memory hierarchical filesystem with a Unix-style shell.'
    )
    parser.add_argument(
        '--config', metavar='PATH',
        help='JSON configuration file'
    )
    parser.add_argument(
        '--script', metavar='PATH',
        help='run the commands in PATH instead of starting an interactive session'
    )
    parser.add_argument(
        '--log-level', choices=[level.name for level in LogLevel],
        type=str.upper,
        help='override the configured log level'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for memfs.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)

    loader = ConfigLoader()
    try:
        config = loader.load(args.config) if args.config else loader.config
        level = LogLevel.from_name(args.log_level or config.logging.level)
    except (ConfigException, ValueError) as e:
        print(f"memfs: {e}", file=sys.stderr)
        return 1

    Logger.initialize(
        level=level,
        log_file=config.logging.log_file,
        console_output=config.logging.console_output
    )
    logger = get_logger('main')
    logger.info("Starting memfs", context={'version': __version__, 'config': args.config})

    if args.script:
        try:
            with open(args.script, 'r', encoding='utf-8') as f:
                script = f.read()
        except OSError as e:
            print(f"memfs: cannot read script: {e}", file=sys.stderr)
            return 1

        shell = create_shell(config)
        return shell.run_script(script)

    shell = create_shell(config)
    try:
        return shell.run()
    except KeyboardInterrupt:
        print("\n\nInterrupted")
        return 130
    finally:
        logger.info("memfs session ended")


if __name__ == '__main__':
    sys.exit(main())
