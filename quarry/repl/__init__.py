"""Interactive shell: input assembly, prompts and the session loop."""

from quarry.repl.assembler import Accumulating, InputAssembler, Single, feed
from quarry.repl.display import ResultDisplay
from quarry.repl.line_source import StreamLineSource, TerminalLineSource, is_compatible_terminal
from quarry.repl.prompt import PromptBuffer, PromptCounter
from quarry.repl.session import SessionLoop

__all__ = [
    "Accumulating",
    "InputAssembler",
    "PromptBuffer",
    "PromptCounter",
    "ResultDisplay",
    "SessionLoop",
    "Single",
    "StreamLineSource",
    "TerminalLineSource",
    "feed",
    "is_compatible_terminal",
]
