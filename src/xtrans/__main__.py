"""Allow running the translator as `python -m xtrans`."""

from xtrans.cli.xtrans import main

if __name__ == "__main__":
    main()
