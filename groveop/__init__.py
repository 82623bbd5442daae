"""Resource types, naming rules, operator configuration, validation and a decoding scheme for Grove."""

__version__ = "0.1.0"