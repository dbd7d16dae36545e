"""Allow `python -m article_narrator`."""

from article_narrator.cli import main

if __name__ == "__main__":
    main()
