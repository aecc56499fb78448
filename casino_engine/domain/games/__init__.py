from .engine import PayoutEngine
from .outcome import GameOutcome

__all__ = [
    'PayoutEngine',
    'GameOutcome'
]
