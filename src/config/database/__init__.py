from src.config.database.postgresql import Base, SessionLocal, engine

__all__ = ["Base", "SessionLocal", "engine"]
