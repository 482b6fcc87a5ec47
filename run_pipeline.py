"""Convenience shim to run the discovery pipeline from a checkout."""

from __future__ import annotations

import sys

from adopters.pipeline.runner import main


if __name__ == "__main__":
    main(sys.argv[1:])
