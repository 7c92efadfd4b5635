import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response, status

from backend.auth.dependencies import get_store, require_teacher
from backend.models.course import Course
from backend.models.user import Identity
from backend.store import CatalogStore

router = APIRouter(tags=['courses'])

logger = logging.getLogger(__name__)


@router.get('', response_model=list[Course])
def list_courses(
    search: str | None = Query(default=None),
    store: CatalogStore = Depends(get_store),
):
    return store.courses.list_all(search=search)


@router.get('/{course_id}', response_model=Course)
def get_course(course_id: int, store: CatalogStore = Depends(get_store)):
    return store.courses.get_by_id(course_id)


@router.post('', response_model=Course, status_code=status.HTTP_201_CREATED)
def create_course(
    payload: Any = Body(default=None),
    teacher: Identity = Depends(require_teacher),
    store: CatalogStore = Depends(get_store),
):
    course = store.courses.create(payload)
    logger.info('Teacher %s created course %s', teacher.id, course.id)
    return course


@router.put('/{course_id}', response_model=Course)
def update_course(
    course_id: int,
    payload: Any = Body(default=None),
    teacher: Identity = Depends(require_teacher),
    store: CatalogStore = Depends(get_store),
):
    course = store.courses.update(course_id, payload)
    logger.info('Teacher %s updated course %s', teacher.id, course.id)
    return course


@router.delete('/{course_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_course(
    course_id: int,
    teacher: Identity = Depends(require_teacher),
    store: CatalogStore = Depends(get_store),
):
    store.courses.delete(course_id)
    logger.info('Teacher %s deleted course %s', teacher.id, course_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
