"""Allow ``python -m gotestreport``."""

from gotestreport.cli import main

if __name__ == "__main__":
    main()
