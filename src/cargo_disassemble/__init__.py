"""cargo-disassemble: easy disassembly of Rust code."""

__version__ = "0.2.0"
