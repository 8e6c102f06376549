"""Run the server: `python -m shoplist` (port from $PORT, default 8080)."""

from shoplist.server import main

if __name__ == "__main__":
    main()
