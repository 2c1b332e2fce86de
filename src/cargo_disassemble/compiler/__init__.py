from .cargo_driver import BuildOptions, CargoDriver, parse_feature_list
from .asm_source import AssemblySource
from .manifest import find_manifest, ownership_prefix, read_package_name
