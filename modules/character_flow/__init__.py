"""
Character flow module.

State machine driving a character from photo intake to a saved cartoon.
"""

from .controller import CharacterFlowController

__all__ = ["CharacterFlowController"]
