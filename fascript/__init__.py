"""An embeddable scripting language: syntax tree nodes, an evaluator and host-function binding."""

__version__ = "0.1.0"