from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from taskboard_api import models, schemas
from taskboard_api.exceptions import PersistenceError
from taskboard_api.logger import get_logger
from typing import Optional

logger = get_logger(__name__)


def get_tasks(db: Session) -> list[models.Task]:
    """Get all tasks, most recently created first"""
    try:
        return (
            db.query(models.Task)
            .order_by(models.Task.created_at.desc(), models.Task.id.desc())
            .all()
        )
    except SQLAlchemyError as e:
        logger.error(f"Error fetching tasks: {str(e)}")
        raise PersistenceError("fetch tasks") from e


def get_tasks_count(db: Session) -> int:
    """Get total count of tasks"""
    try:
        return db.query(models.Task).count()
    except SQLAlchemyError as e:
        logger.error(f"Error counting tasks: {str(e)}")
        raise PersistenceError("count tasks") from e


def get_task(db: Session, task_id: int) -> Optional[models.Task]:
    """Get a single task by ID, None when it does not exist"""
    try:
        return db.query(models.Task).filter(models.Task.id == task_id).first()
    except SQLAlchemyError as e:
        logger.error(f"Error fetching task {task_id}: {str(e)}")
        raise PersistenceError(f"fetch task {task_id}") from e


def create_task(db: Session, task: schemas.CreateTaskInput) -> models.Task:
    """Create a new task"""
    try:
        now = models.utcnow()
        db_task = models.Task(**task.model_dump(), created_at=now, updated_at=now)
        db.add(db_task)
        db.commit()
        db.refresh(db_task)
        logger.info(f"Created task with ID: {db_task.id}")
        return db_task
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating task: {str(e)}")
        raise PersistenceError("create task") from e


def update_task(
    db: Session,
    task_id: int,
    task: schemas.TaskUpdate
) -> Optional[models.Task]:
    """Apply the supplied fields to an existing task.

    ``updated_at`` is refreshed even when none of the supplied values
    differ from the stored ones. Returns None when the task does not exist.
    """
    try:
        db_task = db.query(models.Task).filter(models.Task.id == task_id).first()
        if db_task is None:
            return None
        for key, value in task.changes().items():
            setattr(db_task, key, value)
        db_task.updated_at = models.utcnow()
        db.commit()
        db.refresh(db_task)
        logger.info(f"Updated task with ID: {task_id}")
        return db_task
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating task {task_id}: {str(e)}")
        raise PersistenceError(f"update task {task_id}") from e


def delete_task(db: Session, task_id: int) -> bool:
    """Delete a task, returning whether a row was removed"""
    try:
        deleted = (
            db.query(models.Task)
            .filter(models.Task.id == task_id)
            .delete(synchronize_session="fetch")
        )
        db.commit()
        if deleted:
            logger.info(f"Deleted task with ID: {task_id}")
        return deleted > 0
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting task {task_id}: {str(e)}")
        raise PersistenceError(f"delete task {task_id}") from e
