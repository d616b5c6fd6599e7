import uuid
from http import HTTPStatus
from fastapi import APIRouter, Query
from mentorhub.common.api_endpoints import NOTIFICATIONS_ENDPOINT
from mentorhub.common.errors import ValidationError
from mentorhub.common.fast_api_response_wrapper import api_response
from mentorhub.common.mentorship_enums import ProfileRole
from mentorhub.dto.notification_dto import (
    NotificationCreateDto,
    NotificationDto,
    NotificationUpdateDto,
)
from mentorhub.dto.user_context_dto import UserContextDto
from mentorhub.notification.notification_service import DEFAULT_LIST_LIMIT
from mentorhub.utils.permission_decorators import authenticate


class NotificationController:
    """
    FastAPI controller exposing the caller's in-app notifications.

    Every route works on the caller's own profile; the POST route lets
    administrators create a notification for any profile.
    """

    def __init__(self, notification_service, profile_identity_service, database):
        """
        Initialize the NotificationController with its dependencies and register routes.

        Args:
            notification_service (NotificationService): Service handling notification logic.
            profile_identity_service (ProfileIdentityService): Resolves the caller's profile.
            database (Database): Database access object providing async session management.
        """
        if not notification_service:
            raise ValueError("NotificationService instance is required.")

        self.notification_service = notification_service
        self.profile_identity_service = profile_identity_service
        self.database = database

        self.router = APIRouter(tags=["notifications"])

        self.router.add_api_route(
            NOTIFICATIONS_ENDPOINT,
            endpoint=authenticate()(self.list_notifications),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            NOTIFICATIONS_ENDPOINT,
            endpoint=authenticate()(self.update_notifications),
            methods=["PATCH"],
            response_model=None,
        )
        self.router.add_api_route(
            NOTIFICATIONS_ENDPOINT,
            endpoint=authenticate()(self.delete_notification),
            methods=["DELETE"],
            response_model=None,
        )
        self.router.add_api_route(
            NOTIFICATIONS_ENDPOINT,
            endpoint=authenticate()(self.create_notification),
            methods=["POST"],
            response_model=None,
        )

    async def list_notifications(
        self,
        current_user: UserContextDto,
        unread_only: bool = Query(False, alias="unreadOnly"),
        limit: int = Query(DEFAULT_LIST_LIMIT),
    ):
        """
        List the caller's notifications, newest first.

        Query Parameters:
            unreadOnly (bool): Only return unread notifications.
            limit (int): Page size between 1 and 100, defaults to 50.

        Returns:
            API response with `notifications` and their `count`.
        """
        async with self.database.session() as session:
            profile = await self.profile_identity_service.get_profile(
                session=session, user_context=current_user
            )
            notifications: list[NotificationDto] = (
                await self.notification_service.list_notifications(
                    session=session,
                    user_id=profile.id,
                    unread_only=unread_only,
                    limit=limit,
                )
            )

        return api_response(
            message="Successfully fetched notifications.",
            data={"notifications": notifications, "count": len(notifications)},
        )

    async def update_notifications(
        self, current_user: UserContextDto, body: NotificationUpdateDto
    ):
        """
        Mark one notification, or all of them, as read.

        Body:
            notificationId (uuid | None): The notification to mark as read.
            markAllAsRead (bool): Mark every unread notification instead.
        """
        if not body.mark_all_as_read and body.notification_id is None:
            raise ValidationError("Missing notificationId or markAllAsRead flag")

        async with self.database.session() as session:
            profile = await self.profile_identity_service.get_profile(
                session=session, user_context=current_user
            )
            if body.mark_all_as_read:
                updated = await self.notification_service.mark_all_read(
                    session=session, user_id=profile.id
                )
                return api_response(
                    message="All notifications marked as read",
                    data={"updated": updated},
                )

            await self.notification_service.mark_read(
                session=session,
                user_id=profile.id,
                notification_id=body.notification_id,
            )

        return api_response(message="Notification marked as read")

    async def delete_notification(
        self,
        current_user: UserContextDto,
        notification_id: uuid.UUID | None = Query(None, alias="id"),
    ):
        """Delete one of the caller's notifications, given by the `id` query parameter."""
        if notification_id is None:
            raise ValidationError("Missing notification ID")

        async with self.database.session() as session:
            profile = await self.profile_identity_service.get_profile(
                session=session, user_context=current_user
            )
            await self.notification_service.delete(
                session=session, user_id=profile.id, notification_id=notification_id
            )

        return api_response(message="Notification deleted")

    async def create_notification(
        self, current_user: UserContextDto, body: NotificationCreateDto
    ):
        """Create a notification for any profile (admin only)."""
        async with self.database.session() as session:
            await self.profile_identity_service.require_role(
                session=session,
                user_context=current_user,
                roles=(ProfileRole.ADMIN,),
            )
            notification: NotificationDto = await self.notification_service.create(
                session=session,
                user_id=body.user_id,
                title=body.title,
                message=body.message,
                type=body.type,
                link=body.link,
                metadata=body.metadata,
            )

        return api_response(
            message="Notification created",
            data={"notification": notification},
            status_code=HTTPStatus.CREATED,
        )
