#!/usr/bin/env python3
"""HandSlap - Standalone entry point.

Usage:
    python -m games.HandSlap.main [--width W --height H] [--no-audio]
"""

import argparse
import asyncio
import sys
from typing import Any, Dict, List, Optional

import pygame

from games.HandSlap import config, game_info
from games.HandSlap.game_mode import HandSlapMode
from slapstick.errors import AssetResolutionError, ConfigurationError
from slapstick.logging import configure_logging, get_logger

log = get_logger('hand_slap')


def build_parser(arguments: List[Dict[str, Any]]) -> argparse.ArgumentParser:
    """Build an argparse parser from game_info-style argument definitions."""
    parser = argparse.ArgumentParser(prog='handslap', description=game_info.DESCRIPTION)
    for arg_def in arguments:
        kwargs = {}
        if 'type' in arg_def:
            kwargs['type'] = arg_def['type']
        if 'default' in arg_def:
            kwargs['default'] = arg_def['default']
        if 'help' in arg_def:
            kwargs['help'] = arg_def['help']
        if 'action' in arg_def:
            kwargs['action'] = arg_def['action']
            kwargs.pop('type', None)  # action and type are mutually exclusive
        if 'choices' in arg_def:
            kwargs['choices'] = arg_def['choices']
        parser.add_argument(arg_def['name'], **kwargs)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser(game_info.ARGUMENTS).parse_args(argv)
    if args.log_level:
        configure_logging(level=args.log_level)

    width = args.width or config.SCREEN.width
    height = args.height or config.SCREEN.height
    flags = pygame.RESIZABLE
    if args.fullscreen or config.FULLSCREEN:
        flags = pygame.FULLSCREEN

    pygame.init()
    try:
        screen = pygame.display.set_mode((width, height), flags)
        pygame.display.set_caption(game_info.NAME)

        mode = HandSlapMode(screen, audio_enabled=config.AUDIO_ENABLED and not args.no_audio)
        asyncio.run(mode.run(max_frames=args.max_frames))
    except (ConfigurationError, AssetResolutionError):
        log.exception("Startup failed")
        return 1
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
