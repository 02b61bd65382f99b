"""A small Java virtual machine: class file parsing, classpath search, runtime data area and a bytecode interpreter."""

__version__ = "0.0.1"