"""Example chain generator for ``lib_dotenvx``."""

from .generate import DEFAULT_CHAIN_NAME, ExampleSpec, generate_examples

__all__ = [
    "DEFAULT_CHAIN_NAME",
    "ExampleSpec",
    "generate_examples",
]
