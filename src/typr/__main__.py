"""Allow ``python -m typr``."""

from typr.cli import main

if __name__ == "__main__":
    main()
