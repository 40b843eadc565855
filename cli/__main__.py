"""Interactive VibeMaster session: python -m cli"""
import asyncio

from cli.main import main

if __name__ == "__main__":
    asyncio.run(main())
