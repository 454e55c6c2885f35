from typing import Annotated

from fastapi import APIRouter, Body, Depends, Path, Query, Response, status
from fastapi_problem.error import StatusProblem
from src.core.constants import MAX_PAGE_SIZE, STORE_OBJECT_TYPE
from src.core.dependencies import (
    api_rate_limit,
    get_authorization_service,
    get_gateway_service,
    get_notification_manager,
    get_permission_scope_service,
    get_security_service,
    get_store_service,
    notification_rate_limit,
    require_permissions,
    requires_authenticated_account,
)
from src.core.exceptions import errors
from src.core.helpers.response import IResponseBase, build_json_response
from src.core.logging import add_to_log_context, get_logger
from src.domain.converters import to_core_model, to_web_model
from src.domain.enums import StorePermission
from src.domain.models import Store
from src.domain.notifications import StoreDynamicEmailNotification
from src.domain.schemas import (
    AuthSessionState,
    LoginOnBehalfInfo,
    SendDynamicNotificationRequest,
    StoreSchema,
    StoreSearchCriteria,
    StoreSearchResult,
)
from src.domain.services import AuthorizationService, PermissionScopeService, SecurityService, StoreService
from src.libs.gateways import GatewayService
from src.libs.notifications import NotificationManager

logger = get_logger(__name__)


router = APIRouter(dependencies=[api_rate_limit])


def _to_core_store(store: StoreSchema, gateway_service: GatewayService) -> Store:
    return to_core_model(
        store,
        shipping_methods=gateway_service.get_all_shipping_methods(),
        payment_methods=gateway_service.get_all_payment_methods(),
        tax_providers=gateway_service.get_all_tax_providers(),
    )


async def _search_stores(
    criteria: StoreSearchCriteria,
    auth_state: AuthSessionState,
    store_service: StoreService,
    authorization_service: AuthorizationService,
) -> StoreSearchResult:
    if not await authorization_service.has_global_permission(auth_state.user_name, StorePermission.READ):
        criteria.store_ids = await authorization_service.get_selected_store_ids(
            auth_state.user_name, StorePermission.READ
        )

        if not criteria.store_ids:
            return StoreSearchResult()

    stores, total_count = await store_service.search_stores(criteria)

    return StoreSearchResult(total_count=total_count, stores=[to_web_model(store) for store in stores])


@router.post(
    "/search",
    response_model=IResponseBase[StoreSearchResult],
    operation_id="search_stores",
)
async def search_stores(
    auth_state: Annotated[AuthSessionState, Depends(requires_authenticated_account)],
    store_service: Annotated[StoreService, Depends(get_store_service)],
    authorization_service: Annotated[AuthorizationService, Depends(get_authorization_service)],
    criteria: Annotated[StoreSearchCriteria, Body(...)],
) -> IResponseBase[StoreSearchResult]:
    """
    Search stores. Callers without the global read permission only see the stores they were granted.
    """
    try:
        result = await _search_stores(criteria, auth_state, store_service, authorization_service)

        return build_json_response(data=result, message="Stores retrieved successfully")
    except StatusProblem as sp:
        raise sp
    except Exception as e:
        logger.exception(f"src.domain.routers.stores.search_stores:: Error searching stores: {e}")
        raise errors.ServiceError(detail="Failed to search stores") from e


@router.get(
    "",
    response_model=IResponseBase[StoreSearchResult],
    operation_id="get_stores",
)
async def get_stores(
    auth_state: Annotated[AuthSessionState, Depends(requires_authenticated_account)],
    store_service: Annotated[StoreService, Depends(get_store_service)],
    authorization_service: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> IResponseBase[StoreSearchResult]:
    """
    List every store the caller may read.
    """
    try:
        criteria = StoreSearchCriteria(skip=0, take=MAX_PAGE_SIZE)
        result = await _search_stores(criteria, auth_state, store_service, authorization_service)

        return build_json_response(data=result, message="Stores retrieved successfully")
    except StatusProblem as sp:
        raise sp
    except Exception as e:
        logger.exception(f"src.domain.routers.stores.get_stores:: Error listing stores: {e}")
        raise errors.ServiceError(detail="Failed to retrieve stores") from e


@router.get(
    "/allowed/{user_id}",
    response_model=IResponseBase[list[StoreSchema]],
    operation_id="get_user_allowed_stores",
)
async def get_user_allowed_stores(
    auth_state: Annotated[AuthSessionState, Depends(requires_authenticated_account)],  # noqa: ARG001
    user_id: Annotated[str, Path(..., description="The ID of the account")],
    store_service: Annotated[StoreService, Depends(get_store_service)],
    security_service: Annotated[SecurityService, Depends(get_security_service)],
) -> IResponseBase[list[StoreSchema]]:
    """
    Retrieve the stores an account is allowed to sign in to.
    """
    try:
        account = await security_service.find_by_id(user_id)
        if account is None:
            return build_json_response(data=[], message="Allowed stores retrieved successfully")

        store_ids = await store_service.get_user_allowed_store_ids(account)
        stores = await store_service.get_by_ids(store_ids) if store_ids else []

        return build_json_response(
            data=[to_web_model(store) for store in stores],
            message="Allowed stores retrieved successfully",
        )
    except StatusProblem as sp:
        raise sp
    except Exception as e:
        logger.exception(f"src.domain.routers.stores.get_user_allowed_stores:: Error resolving stores: {e}")
        raise errors.ServiceError(detail="Failed to retrieve allowed stores") from e


@router.post(
    "/send/dynamicnotification",
    dependencies=[notification_rate_limit],
    status_code=status.HTTP_204_NO_CONTENT,
    operation_id="send_dynamic_notification",
)
async def send_dynamic_notification(
    auth_state: Annotated[AuthSessionState, Depends(requires_authenticated_account)],
    store_service: Annotated[StoreService, Depends(get_store_service)],
    notification_manager: Annotated[NotificationManager, Depends(get_notification_manager)],
    request: Annotated[SendDynamicNotificationRequest, Body(...)],
) -> Response:
    """
    Email a storefront form submission to the store.

    The store email is used as both sender and recipient, falling back to the admin email.
    """
    with add_to_log_context(store_id=request.store_id, user_name=auth_state.user_name):
        try:
            store = await store_service.get_by_id(request.store_id)
            if store is None:
                raise errors.StoreNotificationError(detail=f"Store not found. StoreId: {request.store_id}")

            recipient = store.email or store.admin_email
            if not recipient:
                raise errors.StoreNotificationError(
                    detail=f"Both store email and admin email are empty. StoreId: {request.store_id}"
                )

            notification = notification_manager.get_new_notification(
                StoreDynamicEmailNotification,
                object_id=request.store_id,
                object_type=STORE_OBJECT_TYPE,
                language=request.language,
            )
            notification.recipient = recipient
            notification.sender = recipient
            notification.is_active = True
            notification.form_type = request.type
            notification.fields = dict(request.fields)

            notification_manager.schedule_send_notification(notification)

            logger.info(
                f"src.domain.routers.stores.send_dynamic_notification:: notification {notification.id} scheduled",
                extra={"notification_id": notification.id, "form_type": request.type},
            )

            return Response(status_code=status.HTTP_204_NO_CONTENT)
        except StatusProblem as sp:
            raise sp
        except Exception as e:
            logger.exception(f"src.domain.routers.stores.send_dynamic_notification:: Error sending: {e}")
            raise errors.ServiceError(detail="Failed to send the notification") from e


@router.get(
    "/{store_id}/accounts/{id}/loginonbehalf",
    response_model=IResponseBase[LoginOnBehalfInfo],
    operation_id="get_login_on_behalf_info",
)
async def get_login_on_behalf_info(
    auth_state: Annotated[AuthSessionState, Depends(requires_authenticated_account)],  # noqa: ARG001
    store_id: Annotated[str, Path(..., description="The ID of the store")],  # noqa: ARG001
    id: Annotated[str, Path(..., description="The ID of the account")],
    security_service: Annotated[SecurityService, Depends(get_security_service)],
    authorization_service: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> IResponseBase[LoginOnBehalfInfo]:
    """
    Tell whether an account may log in on behalf of the store's customers.
    """
    try:
        info = LoginOnBehalfInfo(user_name=id)

        account = await security_service.find_by_id(id)
        if account is not None:
            info.can_login_on_behalf = await authorization_service.has_global_permission(
                account.user_name, StorePermission.LOGIN_ON_BEHALF
            )

        return build_json_response(data=info, message="Login on behalf info retrieved successfully")
    except StatusProblem as sp:
        raise sp
    except Exception as e:
        logger.exception(f"src.domain.routers.stores.get_login_on_behalf_info:: Error checking account: {e}")
        raise errors.ServiceError(detail="Failed to retrieve login on behalf info") from e


@router.get(
    "/{id}",
    response_model=IResponseBase[StoreSchema],
    operation_id="get_store_by_id",
)
async def get_store_by_id(
    auth_state: Annotated[AuthSessionState, Depends(requires_authenticated_account)],
    id: Annotated[str, Path(..., description="The ID of the store to retrieve")],
    store_service: Annotated[StoreService, Depends(get_store_service)],
    authorization_service: Annotated[AuthorizationService, Depends(get_authorization_service)],
    scope_service: Annotated[PermissionScopeService, Depends(get_permission_scope_service)],
) -> IResponseBase[StoreSchema]:
    """
    Retrieve a store along with the permission scopes it can be assigned under.
    """
    try:
        store = await store_service.get_by_id(id)
        if store is None:
            raise errors.StoreNotFoundError(detail=f"Store not found. StoreId: {id}")

        await authorization_service.check_permission_for_objects(auth_state.user_name, StorePermission.READ, [store])

        result = to_web_model(store)
        result.security_scopes = scope_service.get_object_permission_scope_strings(store)

        return build_json_response(data=result, message="Store retrieved successfully")
    except StatusProblem as sp:
        raise sp
    except Exception as e:
        logger.exception(f"src.domain.routers.stores.get_store_by_id:: Error retrieving store {id}: {e}")
        raise errors.ServiceError(detail="Failed to retrieve store") from e


@router.post(
    "",
    response_model=IResponseBase[StoreSchema],
    operation_id="create_store",
)
async def create_store(
    auth_state: Annotated[AuthSessionState, Depends(require_permissions(StorePermission.CREATE))],
    store_service: Annotated[StoreService, Depends(get_store_service)],
    gateway_service: Annotated[GatewayService, Depends(get_gateway_service)],
    store: Annotated[StoreSchema, Body(...)],
) -> IResponseBase[StoreSchema]:
    """
    Create a store, wiring it to every known shipping method, payment method and tax provider.
    """
    try:
        core_store = _to_core_store(store, gateway_service)
        created = await store_service.create(core_store, created_by=auth_state.user_name)

        return build_json_response(data=to_web_model(created), message="Store created successfully")
    except StatusProblem as sp:
        raise sp
    except Exception as e:
        logger.exception(f"src.domain.routers.stores.create_store:: Error creating store: {e}")
        raise errors.ServiceError(detail="Failed to create store") from e


@router.put(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    operation_id="update_store",
)
async def update_store(
    auth_state: Annotated[AuthSessionState, Depends(requires_authenticated_account)],
    store_service: Annotated[StoreService, Depends(get_store_service)],
    authorization_service: Annotated[AuthorizationService, Depends(get_authorization_service)],
    gateway_service: Annotated[GatewayService, Depends(get_gateway_service)],
    store: Annotated[StoreSchema, Body(...)],
) -> Response:
    """
    Update a store the caller may update.
    """
    try:
        core_store = _to_core_store(store, gateway_service)

        await authorization_service.check_permission_for_objects(
            auth_state.user_name, StorePermission.UPDATE, [core_store]
        )
        await store_service.update([core_store], modified_by=auth_state.user_name)

        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except StatusProblem as sp:
        raise sp
    except Exception as e:
        logger.exception(f"src.domain.routers.stores.update_store:: Error updating store {store.id}: {e}")
        raise errors.ServiceError(detail="Failed to update store") from e


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    operation_id="delete_stores",
)
async def delete_stores(
    auth_state: Annotated[AuthSessionState, Depends(requires_authenticated_account)],
    store_service: Annotated[StoreService, Depends(get_store_service)],
    authorization_service: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ids: Annotated[list[str], Query(..., description="The IDs of the stores to delete")],
) -> Response:
    """
    Delete stores. The caller needs the delete permission for every existing one of them.
    """
    try:
        stores = await store_service.get_by_ids(ids)

        await authorization_service.check_permission_for_objects(auth_state.user_name, StorePermission.DELETE, stores)
        await store_service.delete(ids)

        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except StatusProblem as sp:
        raise sp
    except Exception as e:
        logger.exception(f"src.domain.routers.stores.delete_stores:: Error deleting stores: {e}")
        raise errors.ServiceError(detail="Failed to delete stores") from e
