from .rust_demangle import DemangledSymbol, NOT_A_SYMBOL, NotASymbol, try_demangle, display_name
from .lexer import AssemblyLine, LineKind, classify_line
from .filters import FilterCriteria, normalize_package_name
from .extractor import ExtractorState, FunctionExtractor, extract_functions, rewrite_call
from .diagnostics import parse_diagnostics, Diagnostic
