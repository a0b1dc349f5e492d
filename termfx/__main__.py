"""Allow ``python -m termfx``."""

from termfx.cli.main import main

if __name__ == "__main__":
    main()
