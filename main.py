"""
Main application entry point for rssview
"""
from rssview.cli import main


if __name__ == "__main__":
    main()
