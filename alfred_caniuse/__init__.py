"""
alfred-caniuse: look up Rust feature availability from caniuse.rs.
"""

__version__ = "0.3.0"
