"""Allows `python -m sandpendulum`."""
from sandpendulum.main import main

if __name__ == "__main__":
    main()
