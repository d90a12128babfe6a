"""Allow ``python -m microblog``."""

from microblog.ui.cli import main


if __name__ == "__main__":
    main()
