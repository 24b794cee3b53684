from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from taskboard_api.config import get_settings
from taskboard_api.logger import get_logger

settings = get_settings()
logger = get_logger(__name__)


def _engine_options() -> dict:
    """Pool settings for server databases, thread sharing for SQLite"""
    options = {"echo": settings.debug}  # Log SQL queries in debug mode
    if settings.is_sqlite:
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
        )
    return options


engine = create_engine(settings.database_url, **_engine_options())

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Database session dependency"""
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"Database session error: {str(e)}")
        db.rollback()
        raise
    finally:
        db.close()


def init_db():
    """Initialize database tables"""
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Error creating database tables: {str(e)}")
        raise
