"""Listing Catalog — the fixed set of admin listings and their SQL bindings.

Invariants:
    - Every filter and sort field named in a ListingDefinition has a column here
    - Every source tiebreaks on its table's primary key
    - Computed counts are correlated scalar subqueries, so base statements never
      group and one row is one entity
"""

from sqlalchemy import func, select

from admin_console.core.domain_types import (
    AuditAction, GenerationStatus, Role, RoomType, StagingStyle,
)
from admin_console.core.filter_spec import FilterField, FilterKind, ListingDefinition
from admin_console.models.admin_action import AdminAction
from admin_console.models.generation import Generation
from admin_console.models.project import Project
from admin_console.models.source_image import SourceImage
from admin_console.models.user import User
from admin_console.services.query_engine import ListingSource


def _choices(enum_cls) -> tuple[str, ...]:
    return tuple(member.value for member in enum_cls)


def _owner(row) -> dict:
    return {
        "id": row.user_id,
        "name": row.user_name,
        "email": row.user_email,
    }


# ─── Users ───────────────────────────────────────────────────────

_user_project_count = (
    select(func.count(Project.id))
    .where(Project.user_id == User.id)
    .correlate(User)
    .scalar_subquery()
    .label("project_count")
)
_user_image_count = (
    select(func.count(SourceImage.id))
    .where(SourceImage.user_id == User.id)
    .correlate(User)
    .scalar_subquery()
    .label("image_count")
)

USERS = ListingDefinition(
    name="users",
    filters=(
        FilterField("search", FilterKind.SEARCH),
        FilterField("role", FilterKind.ENUM, _choices(Role)),
        FilterField("createdAt", FilterKind.DATE_RANGE),
    ),
    sort_fields=(
        "createdAt", "name", "email", "lastActiveAt", "projectCount", "imageCount",
    ),
)


def _users_base():
    return select(
        User.id, User.name, User.email, User.image, User.role, User.suspended,
        User.created_at, User.updated_at, User.last_active_at, User.last_login_at,
        _user_project_count, _user_image_count,
    )


def serialize_user(row) -> dict:
    return {
        "id": row.id,
        "name": row.name,
        "email": row.email,
        "image": row.image,
        "role": row.role,
        "suspended": row.suspended,
        "createdAt": row.created_at,
        "updatedAt": row.updated_at,
        "lastActiveAt": row.last_active_at,
        "lastLoginAt": row.last_login_at,
        "projectCount": row.project_count,
        "imageCount": row.image_count,
    }


USERS_SOURCE = ListingSource(
    definition=USERS,
    base=_users_base,
    columns={
        "role": User.role,
        "createdAt": User.created_at,
        "name": User.name,
        "email": User.email,
        "lastActiveAt": User.last_active_at,
        "projectCount": _user_project_count,
        "imageCount": _user_image_count,
    },
    search_columns=(User.name, User.email),
    tiebreak=User.id,
    serialize=serialize_user,
)


# ─── Projects ────────────────────────────────────────────────────

_project_image_count = (
    select(func.count(SourceImage.id))
    .where(SourceImage.project_id == Project.id)
    .correlate(Project)
    .scalar_subquery()
    .label("image_count")
)

PROJECTS = ListingDefinition(
    name="projects",
    filters=(
        FilterField("search", FilterKind.SEARCH),
        FilterField("userId", FilterKind.IDENTIFIER),
        FilterField("createdAt", FilterKind.DATE_RANGE),
    ),
    sort_fields=("createdAt", "updatedAt", "name", "userName", "imageCount"),
)


def _projects_base():
    return (
        select(
            Project.id, Project.name, Project.created_at, Project.updated_at,
            User.id.label("user_id"), User.name.label("user_name"),
            User.email.label("user_email"), _project_image_count,
        )
        .select_from(Project)
        .join(User, Project.user_id == User.id)
    )


def serialize_project(row) -> dict:
    return {
        "id": row.id,
        "name": row.name,
        "createdAt": row.created_at,
        "updatedAt": row.updated_at,
        "user": _owner(row),
        "imageCount": row.image_count,
    }


PROJECTS_SOURCE = ListingSource(
    definition=PROJECTS,
    base=_projects_base,
    columns={
        "userId": Project.user_id,
        "createdAt": Project.created_at,
        "updatedAt": Project.updated_at,
        "name": Project.name,
        "userName": User.name,
        "imageCount": _project_image_count,
    },
    search_columns=(Project.name, User.name, User.email),
    tiebreak=Project.id,
    serialize=serialize_project,
)


# ─── Images (generations) ────────────────────────────────────────

IMAGES = ListingDefinition(
    name="images",
    filters=(
        FilterField("search", FilterKind.SEARCH),
        FilterField("status", FilterKind.ENUM, _choices(GenerationStatus)),
        FilterField("roomType", FilterKind.ENUM, _choices(RoomType)),
        FilterField("stagingStyle", FilterKind.ENUM, _choices(StagingStyle)),
        FilterField("userId", FilterKind.IDENTIFIER),
        FilterField("projectId", FilterKind.UUID),
        FilterField("createdAt", FilterKind.DATE_RANGE),
        FilterField("processingTimeMs", FilterKind.NUMBER_RANGE),
    ),
    sort_fields=(
        "createdAt", "completedAt", "originalFileName", "projectName",
        "userName", "status", "processingTimeMs",
    ),
)


def _images_base():
    return (
        select(
            Generation.id, Generation.status, Generation.room_type,
            Generation.staging_style, Generation.operation_type,
            Generation.variation_index, Generation.processing_time_ms,
            Generation.error_message, Generation.created_at, Generation.completed_at,
            SourceImage.id.label("source_image_id"), SourceImage.original_file_name,
            SourceImage.display_name, SourceImage.file_size,
            Project.id.label("project_id"), Project.name.label("project_name"),
            User.id.label("user_id"), User.name.label("user_name"),
            User.email.label("user_email"),
        )
        .select_from(Generation)
        .join(SourceImage, Generation.source_image_id == SourceImage.id)
        .join(Project, Generation.project_id == Project.id)
        .join(User, Generation.user_id == User.id)
    )


def serialize_image(row) -> dict:
    return {
        "id": row.id,
        "status": row.status,
        "roomType": row.room_type,
        "stagingStyle": row.staging_style,
        "operationType": row.operation_type,
        "variationIndex": row.variation_index,
        "processingTimeMs": row.processing_time_ms,
        "errorMessage": row.error_message,
        "createdAt": row.created_at,
        "completedAt": row.completed_at,
        "sourceImage": {
            "id": row.source_image_id,
            "originalFileName": row.original_file_name,
            "displayName": row.display_name,
            "fileSize": row.file_size,
        },
        "project": {"id": row.project_id, "name": row.project_name},
        "user": _owner(row),
    }


IMAGES_SOURCE = ListingSource(
    definition=IMAGES,
    base=_images_base,
    columns={
        "status": Generation.status,
        "roomType": Generation.room_type,
        "stagingStyle": Generation.staging_style,
        "userId": Generation.user_id,
        "projectId": Generation.project_id,
        "createdAt": Generation.created_at,
        "completedAt": Generation.completed_at,
        "processingTimeMs": Generation.processing_time_ms,
        "originalFileName": SourceImage.original_file_name,
        "projectName": Project.name,
        "userName": User.name,
    },
    search_columns=(
        SourceImage.original_file_name, SourceImage.display_name,
        Project.name, User.email,
    ),
    tiebreak=Generation.id,
    serialize=serialize_image,
)


# ─── Audit log ───────────────────────────────────────────────────

AUDIT = ListingDefinition(
    name="audit",
    filters=(
        FilterField("search", FilterKind.SEARCH),
        FilterField("action", FilterKind.ENUM, _choices(AuditAction)),
        FilterField("adminId", FilterKind.IDENTIFIER),
        FilterField("targetUserId", FilterKind.IDENTIFIER),
        FilterField("createdAt", FilterKind.DATE_RANGE),
    ),
    sort_fields=("createdAt", "action", "adminEmail", "targetResourceName"),
)


def _audit_base():
    return (
        select(
            AdminAction.id, AdminAction.action, AdminAction.admin_id,
            AdminAction.target_user_id, AdminAction.target_resource_type,
            AdminAction.target_resource_id, AdminAction.target_resource_name,
            AdminAction.ip_address, AdminAction.user_agent,
            AdminAction.request_path, AdminAction.details.label("details"),
            AdminAction.created_at,
            User.email.label("admin_email"), User.name.label("admin_name"),
        )
        .select_from(AdminAction)
        .join(User, AdminAction.admin_id == User.id)
    )


def serialize_audit_entry(row) -> dict:
    return {
        "id": row.id,
        "action": row.action,
        "admin": {
            "id": row.admin_id,
            "email": row.admin_email,
            "name": row.admin_name,
        },
        "targetUserId": row.target_user_id,
        "targetResourceType": row.target_resource_type,
        "targetResourceId": row.target_resource_id,
        "targetResourceName": row.target_resource_name,
        "ipAddress": row.ip_address,
        "userAgent": row.user_agent,
        "requestPath": row.request_path,
        "metadata": row.details,
        "createdAt": row.created_at,
    }


AUDIT_SOURCE = ListingSource(
    definition=AUDIT,
    base=_audit_base,
    columns={
        "action": AdminAction.action,
        "adminId": AdminAction.admin_id,
        "targetUserId": AdminAction.target_user_id,
        "createdAt": AdminAction.created_at,
        "adminEmail": User.email,
        "targetResourceName": AdminAction.target_resource_name,
    },
    search_columns=(
        AdminAction.target_resource_name, AdminAction.target_resource_type,
        User.email,
    ),
    tiebreak=AdminAction.id,
    serialize=serialize_audit_entry,
)
