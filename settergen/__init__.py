"""Generate setter methods for annotated Go structs."""

from .config import DEFAULT_TARGET_FIELDS, GeneratorConfig, load_config
from .emitter import SetterEmitter
from .generator import RunReport, SetterGenerator
from .scanner import DeclarationScanner
from .synthesizer import synthesize
from .type_printer import TypePrinter

__all__ = [
    "DEFAULT_TARGET_FIELDS",
    "DeclarationScanner",
    "GeneratorConfig",
    "RunReport",
    "SetterEmitter",
    "SetterGenerator",
    "TypePrinter",
    "load_config",
    "synthesize",
]
