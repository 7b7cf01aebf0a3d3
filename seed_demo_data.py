#!/usr/bin/env python3
"""
Populate the database with demo professionals and Monday-Wednesday assignments
Usage: python seed_demo_data.py
"""
import logging

from scheduleboard import models  # noqa: F401
from scheduleboard.database import Base, SessionLocal, engine
from scheduleboard.seed import seed_demo_data

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def main():
    Base.metadata.create_all(bind=engine, checkfirst=True)
    db = SessionLocal()
    try:
        result = seed_demo_data(db)
        logger.info(
            f"✅ Demo data ready: {result['professionals']} professionals, {result['assignments']} assignments written"
        )
    finally:
        db.close()


if __name__ == "__main__":
    main()
