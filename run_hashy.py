"""Entry point for PyInstaller executable."""
import sys

if __name__ == "__main__":
    from hashy.cli import main
    sys.exit(main())
