import logging
from typing import List, Optional, Union

from application.actions.pipeline import (
    ActionForbiddenError,
    ActionInvalidError,
    run_action,
)
from application.actions.tag_actions import (
    AssignUnassignTag,
    CreateEditTag,
    DeleteTag,
)
from application.converters.tag_converter import TagConverter
from application.rest.schemas.input.tag_input import CreateEditTagInput
from application.rest.schemas.output.common_output import (
    ErrorResponse,
    FieldFailuresResponse,
    MessageResponse,
)
from application.rest.schemas.output.tag_output import TagResponse
from domain.entities.user import UserEntity
from domain.queries.base import EntityNotFoundError
from domain.services.dispatcher import Dispatcher
from domain.services.tag_service import TagService
from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from utils.dependencies import (
    get_current_user,
    get_db,
    get_dispatcher,
    get_tag_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()

FORBIDDEN_RESPONSE = {
    "model": ErrorResponse,
    "description": "Caller is not allowed to perform this action.",
    "content": {"application/json": {"example": {"detail": "Forbidden"}}},
}

NOT_FOUND_RESPONSE = {
    "model": ErrorResponse,
    "description": "Referenced tag or post does not exist.",
    "content": {
        "application/json": {"example": {"detail": "Tag with slug 'bug' not found"}}
    },
}

INVALID_FIELDS_RESPONSE = {
    "model": FieldFailuresResponse,
    "description": "One or more fields are invalid.",
    "content": {
        "application/json": {
            "example": {
                "detail": "Request has invalid fields",
                "error_code": "INVALID_FIELDS",
                "failures": {"name": ["Name is required."]},
            }
        }
    },
}


def _invalid_fields_response(error: ActionInvalidError) -> JSONResponse:
    body = FieldFailuresResponse(
        detail=str(error), error_code="INVALID_FIELDS", failures=error.result.failures
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump()
    )


@router.get(
    path="/tags",
    description="Retrieve the tags visible to the caller.",
    response_model=List[TagResponse],
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - database connection failed.",
        },
    },
)
async def get_tags(
    db: Session = Depends(get_db),
    tag_service: TagService = Depends(get_tag_service),
    user: Optional[UserEntity] = Depends(get_current_user),
) -> List[TagResponse]:
    """Get all tags the caller may see.

    Private tags are only listed for collaborators and administrators.

    Args:
        db (Session): Fresh database session for this request.
        tag_service (TagService): Domain service with injected repository.
        user (Optional[UserEntity]): The caller, None when anonymous.

    Returns:
        List[TagResponse]: Visible tags sorted by name.

    Raises:
        HTTPException: 500 if internal server errors occur.
    """
    try:
        tag_entities = await tag_service.get_all_tags(db, user)
        return TagConverter.entities_to_responses(tag_entities)
    except Exception as e:
        logger.error(f"Failed to retrieve tags: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve tags",
        ) from e


@router.post(
    path="/tags",
    description="Create a new tag. Administrators only.",
    response_model=TagResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: INVALID_FIELDS_RESPONSE,
        status.HTTP_403_FORBIDDEN: FORBIDDEN_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - tag creation failed.",
        },
    },
)
async def create_tag(
    tag_input: CreateEditTagInput,
    db: Session = Depends(get_db),
    dispatcher: Dispatcher = Depends(get_dispatcher),
    tag_service: TagService = Depends(get_tag_service),
    user: Optional[UserEntity] = Depends(get_current_user),
) -> Union[TagResponse, JSONResponse]:
    """Create a new tag after authorization and validation.

    Args:
        tag_input (CreateEditTagInput): Tag name, color and visibility.
        db (Session): Fresh database session for this request.
        dispatcher (Dispatcher): Query dispatcher for this request.
        tag_service (TagService): Domain service with injected repository.
        user (Optional[UserEntity]): The caller.

    Returns:
        TagResponse: Created tag response schema.

    Raises:
        HTTPException: 403 if the caller is not an administrator.
        HTTPException: 500 if internal server errors occur.
    """
    payload = tag_input.model_dump(exclude={"slug"})
    try:
        action = await run_action(CreateEditTag(dispatcher), payload, user)
        model = action.model
        created = await tag_service.create_tag(
            db, model.name, model.color, model.is_public
        )
        return TagConverter.entity_to_response(created)
    except ActionInvalidError as e:
        return _invalid_fields_response(e)
    except ActionForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to create tag: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create tag",
        ) from e


@router.put(
    path="/tags/{slug}",
    description="Edit an existing tag. Administrators only.",
    response_model=TagResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_400_BAD_REQUEST: INVALID_FIELDS_RESPONSE,
        status.HTTP_403_FORBIDDEN: FORBIDDEN_RESPONSE,
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - tag update failed.",
        },
    },
)
async def update_tag(
    slug: str,
    tag_input: CreateEditTagInput,
    db: Session = Depends(get_db),
    dispatcher: Dispatcher = Depends(get_dispatcher),
    tag_service: TagService = Depends(get_tag_service),
    user: Optional[UserEntity] = Depends(get_current_user),
) -> Union[TagResponse, JSONResponse]:
    """Edit the tag identified by ``slug``.

    Args:
        slug (str): Slug of the tag to edit.
        tag_input (CreateEditTagInput): New name, color and visibility.
        db (Session): Fresh database session for this request.
        dispatcher (Dispatcher): Query dispatcher for this request.
        tag_service (TagService): Domain service with injected repository.
        user (Optional[UserEntity]): The caller.

    Returns:
        TagResponse: Updated tag response schema.

    Raises:
        HTTPException: 403 if the caller is not an administrator.
        HTTPException: 404 if the tag does not exist.
        HTTPException: 500 if internal server errors occur.
    """
    payload = {**tag_input.model_dump(), "slug": slug}
    try:
        action = await run_action(CreateEditTag(dispatcher), payload, user)
        model = action.model
        updated = await tag_service.update_tag(
            db, action.tag, model.name, model.color, model.is_public
        )
        return TagConverter.entity_to_response(updated)
    except ActionInvalidError as e:
        return _invalid_fields_response(e)
    except ActionForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to update tag {slug}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update tag",
        ) from e


@router.delete(
    path="/tags/{slug}",
    description="Delete a tag and remove it from every post. Administrators only.",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        status.HTTP_403_FORBIDDEN: FORBIDDEN_RESPONSE,
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - tag deletion failed.",
        },
    },
)
async def delete_tag(
    slug: str,
    db: Session = Depends(get_db),
    dispatcher: Dispatcher = Depends(get_dispatcher),
    tag_service: TagService = Depends(get_tag_service),
    user: Optional[UserEntity] = Depends(get_current_user),
) -> Response:
    """Delete the tag identified by ``slug``.

    Raises:
        HTTPException: 403 if the caller is not an administrator.
        HTTPException: 404 if the tag does not exist.
        HTTPException: 500 if internal server errors occur.
    """
    try:
        action = await run_action(DeleteTag(dispatcher), {"slug": slug}, user)
        await tag_service.delete_tag(db, action.tag)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except ActionForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to delete tag {slug}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete tag",
        ) from e


@router.post(
    path="/posts/{number}/tags/{slug}",
    description="Assign a tag to a post. Collaborators and administrators only.",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_403_FORBIDDEN: FORBIDDEN_RESPONSE,
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
    },
)
async def assign_tag(
    number: int,
    slug: str,
    db: Session = Depends(get_db),
    dispatcher: Dispatcher = Depends(get_dispatcher),
    tag_service: TagService = Depends(get_tag_service),
    user: Optional[UserEntity] = Depends(get_current_user),
) -> MessageResponse:
    """Assign the tag ``slug`` to post ``number``. Assigning twice is harmless."""
    payload = {"number": number, "slug": slug}
    try:
        action = await run_action(AssignUnassignTag(dispatcher), payload, user)
        await tag_service.assign_tag(db, action.tag, action.post)
        return MessageResponse(message=f"Tag '{slug}' assigned to post #{number}")
    except ActionForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to assign tag {slug} to post #{number}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to assign tag",
        ) from e


@router.delete(
    path="/posts/{number}/tags/{slug}",
    description="Remove a tag from a post. Collaborators and administrators only.",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_403_FORBIDDEN: FORBIDDEN_RESPONSE,
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
    },
)
async def unassign_tag(
    number: int,
    slug: str,
    db: Session = Depends(get_db),
    dispatcher: Dispatcher = Depends(get_dispatcher),
    tag_service: TagService = Depends(get_tag_service),
    user: Optional[UserEntity] = Depends(get_current_user),
) -> MessageResponse:
    """Remove the tag ``slug`` from post ``number``."""
    payload = {"number": number, "slug": slug}
    try:
        action = await run_action(AssignUnassignTag(dispatcher), payload, user)
        await tag_service.unassign_tag(db, action.tag, action.post)
        return MessageResponse(message=f"Tag '{slug}' removed from post #{number}")
    except ActionForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to unassign tag {slug} from post #{number}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to unassign tag",
        ) from e
