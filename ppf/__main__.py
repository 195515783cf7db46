"""Allow ``python -m ppf``."""
from .cli import main

if __name__ == "__main__":
    main()
