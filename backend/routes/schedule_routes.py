from fastapi import APIRouter, Depends, Response, status

from backend.auth.dependencies import get_store, require_auth
from backend.models.course import Course
from backend.models.user import Identity
from backend.store import CatalogStore

router = APIRouter(tags=['schedule'])


@router.get('/schedule', response_model=list[Course])
def get_my_schedule(
    current_user: Identity = Depends(require_auth),
    store: CatalogStore = Depends(get_store),
):
    return store.schedules.get_schedule(current_user.id)


@router.post('/schedule/{course_id}', status_code=status.HTTP_204_NO_CONTENT)
def enroll_in_course(
    course_id: int,
    current_user: Identity = Depends(require_auth),
    store: CatalogStore = Depends(get_store),
):
    store.schedules.enroll(current_user.id, course_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete('/schedule/{course_id}', status_code=status.HTTP_204_NO_CONTENT)
def drop_course(
    course_id: int,
    current_user: Identity = Depends(require_auth),
    store: CatalogStore = Depends(get_store),
):
    store.schedules.drop(current_user.id, course_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
