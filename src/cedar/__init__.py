"""cedar - A minimal project manager for C.

Builds projects laid out as:

    cedar.toml
    src/
    include/
    build/

The build pipeline lives in cedar.build; run_build() is its entry point.
"""

__version__ = "0.1.0"
