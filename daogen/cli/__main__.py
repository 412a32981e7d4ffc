#!/usr/bin/env python3
"""Entry point for the daogen CLI when run as python -m daogen.cli."""

if __name__ == "__main__":
    from daogen.cli.main import main

    main()
