"""HandSlap - Game Info

A hand follows the pointer on a spring. Swing it left through the face
fast enough and it slaps.
"""

NAME = "Hand Slap"
DESCRIPTION = "Swing the hand through the face to slap it"
VERSION = "1.0.0"
AUTHOR = "Slapstick Team"

ARGUMENTS = [
    {
        'name': '--width',
        'type': int,
        'default': None,
        'help': 'Window width in pixels (overrides SCREEN_WIDTH)'
    },
    {
        'name': '--height',
        'type': int,
        'default': None,
        'help': 'Window height in pixels (overrides SCREEN_HEIGHT)'
    },
    {
        'name': '--fullscreen',
        'action': 'store_true',
        'default': False,
        'help': 'Run fullscreen'
    },
    {
        'name': '--no-audio',
        'action': 'store_true',
        'default': False,
        'help': 'Do not load or play the slap sound'
    },
    {
        'name': '--log-level',
        'type': str,
        'default': None,
        'choices': ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'OFF'],
        'help': 'Default log level (overrides SLAPSTICK_LOG_LEVEL)'
    },
    {
        'name': '--max-frames',
        'type': int,
        'default': None,
        'help': 'Exit after this many frames (smoke testing)'
    },
]


def get_game_mode(screen, **kwargs):
    """Factory function to create game instance."""
    from games.HandSlap.game_mode import HandSlapMode
    return HandSlapMode(screen, **kwargs)
