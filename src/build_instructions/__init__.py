"""build-instructions - print build script instructions for Cargo."""

from loguru import logger

from .cargo import Cargo, PathBehavior
from .core import BufferOut, Instruction, KeyedValue, Out, Prefix, SingleValue, StdoutOut
from .errors import BuildInstructionsError, ConfigurationError, PathNotFoundError

__version__ = "0.1.0"

__all__ = [
    "BufferOut",
    "BuildInstructionsError",
    "Cargo",
    "ConfigurationError",
    "Instruction",
    "KeyedValue",
    "Out",
    "PathBehavior",
    "PathNotFoundError",
    "Prefix",
    "SingleValue",
    "StdoutOut",
]

logger.disable("build_instructions")
