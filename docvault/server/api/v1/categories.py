"""
Category Endpoints.

Every user can list categories; creating, renaming and deleting them is
reserved to administrators. Deleting a category keeps its documents, which
become uncategorized.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Form, Request

from docvault.core.database.entities.categories import Category
from docvault.core.database.repositories import CategoryRepository
from docvault.core.logging_config import get_logger
from docvault.core.models.io import CategoryWithCount
from docvault.server.exception_handlers import FormValidationError
from docvault.server.services.deps import AdminUser, CategoriesDep, CurrentUser
from docvault.server.services.pages import flash, redirect_back, render

logger = get_logger(__name__)

router = APIRouter(prefix="/categories", tags=["categories"])

MAX_NAME_LENGTH = 100
CATEGORIES_URL = "/categories"


def _validated_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise FormValidationError.single("name", "The name field is required.")
    if len(name) > MAX_NAME_LENGTH:
        raise FormValidationError.single(
            "name", f"The name field must not be greater than {MAX_NAME_LENGTH} characters."
        )
    return name


async def _existing_category(categories: CategoryRepository, category_id: Optional[int]) -> Category:
    if category_id is None:
        raise FormValidationError.single("id", "The id field is required.")
    category = await categories.get_by_id(category_id)
    if category is None:
        raise FormValidationError.single("id", "The selected id is invalid.")
    return category


@router.get(
    "",
    summary="List Categories",
    description="Categories ordered by name with their number of documents.",
    responses={401: {"description": "Not logged in"}},
)
async def list_categories(request: Request, user: CurrentUser, categories: CategoriesDep):
    rows = [
        CategoryWithCount(id=category.id, name=category.name, documents_count=count)
        for category, count in await categories.list_with_counts()
    ]
    return render(
        request,
        "categories/index",
        {"categories": rows, "can_manage": user.is_administrator},
        user,
    )


@router.post(
    "",
    summary="Create Category",
    responses={
        303: {"description": "Created, redirected back"},
        403: {"description": "Not an administrator"},
        422: {"description": "Missing, too long or duplicated name"},
    },
)
async def create_category(
    request: Request,
    user: AdminUser,
    categories: CategoriesDep,
    name: Annotated[Optional[str], Form()] = None,
):
    name = _validated_name(name)
    if await categories.get_by_name(name) is not None:
        raise FormValidationError.single("name", "The name has already been taken.")

    category = await categories.create(Category(name=name))
    logger.info(f"User {user.id} created category {category.id} ({category.name})")
    flash(request, "Category created successfully.")
    return redirect_back(request, CATEGORIES_URL)


@router.put(
    "/update",
    summary="Rename Category",
    responses={
        303: {"description": "Renamed, redirected back"},
        403: {"description": "Not an administrator"},
        422: {"description": "Unknown id, or missing, too long or duplicated name"},
    },
)
async def update_category(
    request: Request,
    user: AdminUser,
    categories: CategoriesDep,
    id: Annotated[Optional[int], Form()] = None,
    name: Annotated[Optional[str], Form()] = None,
):
    category = await _existing_category(categories, id)
    name = _validated_name(name)
    duplicate = await categories.get_by_name(name)
    if duplicate is not None and duplicate.id != category.id:
        raise FormValidationError.single("name", "The name has already been taken.")

    await categories.rename(category, name)
    logger.info(f"User {user.id} renamed category {category.id} to {name}")
    flash(request, "Category updated.")
    return redirect_back(request, CATEGORIES_URL)


@router.post(
    "/destroy",
    summary="Delete Category",
    description="Delete a category; its documents are kept without category.",
    responses={
        303: {"description": "Deleted, redirected back"},
        403: {"description": "Not an administrator"},
        422: {"description": "Unknown id"},
    },
)
async def delete_category(
    request: Request,
    user: AdminUser,
    categories: CategoriesDep,
    id: Annotated[Optional[int], Form()] = None,
):
    category = await _existing_category(categories, id)
    await categories.delete(category.id)
    logger.info(f"User {user.id} deleted category {category.id}")
    flash(request, "Category deleted.")
    return redirect_back(request, CATEGORIES_URL)
