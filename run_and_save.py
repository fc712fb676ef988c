import sys
import asyncio
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()

USAGE = "usage: python run_and_save.py [listings|properties|all]"


def run_cycle(name, refresh, config):
    """Run one refresh cycle with its own session and return the stored count."""
    from app.db import SessionLocal

    db = SessionLocal()
    try:
        stored = asyncio.run(refresh(db, config))
    finally:
        db.close()
    print(f"Stored {len(stored)} {name}.")
    return len(stored)


if __name__ == "__main__":
    target = sys.argv[1] if len(sys.argv) > 1 else "all"
    if target not in ("listings", "properties", "all"):
        raise SystemExit(USAGE)

    from app import services
    from app.config import load_config
    from app.db import Base, engine
    from app.sitemap import SitemapFetchError
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    config = load_config()

    cycles = []
    if target in ("listings", "all"):
        cycles.append(("listings", services.refresh_listings))
    if target in ("properties", "all"):
        cycles.append(("properties", services.refresh_properties))

    failed = False
    for name, refresh in cycles:
        print(f"Refreshing {name}...")
        try:
            run_cycle(name, refresh, config)
        except SitemapFetchError as e:
            print(f"Refresh of {name} aborted: {e}")
            failed = True
    raise SystemExit(1 if failed else 0)
