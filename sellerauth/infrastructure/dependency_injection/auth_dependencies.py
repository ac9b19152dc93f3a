"""FastAPI dependency providers backed by the application's ``ServiceContainer``.

The container lives on ``app.state.container``; these helpers expose its
members to route handlers through ``Depends``.
"""

from typing import Annotated

from fastapi import Depends, Request

from sellerauth.domain.interfaces.repositories import IUserRepository
from sellerauth.domain.services.auth import TokenRevocationRegistry, TokenService
from sellerauth.domain.services.authentication import AuthOrchestrator
from sellerauth.domain.services.seller import SellerCredentialLinker
from sellerauth.infrastructure.dependency_injection.container import ServiceContainer


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_auth_orchestrator(container: Annotated[ServiceContainer, Depends(get_container)]) -> AuthOrchestrator:
    return container.orchestrator


def get_seller_linker(container: Annotated[ServiceContainer, Depends(get_container)]) -> SellerCredentialLinker:
    return container.seller_linker


def get_token_service(container: Annotated[ServiceContainer, Depends(get_container)]) -> TokenService:
    return container.token_service


def get_revocation_registry(
    container: Annotated[ServiceContainer, Depends(get_container)],
) -> TokenRevocationRegistry:
    return container.revocation_registry


def get_user_repository(container: Annotated[ServiceContainer, Depends(get_container)]) -> IUserRepository:
    return container.users


# Type aliases for route signatures
AuthOrchestratorDep = Annotated[AuthOrchestrator, Depends(get_auth_orchestrator)]
SellerLinkerDep = Annotated[SellerCredentialLinker, Depends(get_seller_linker)]
TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
RevocationRegistryDep = Annotated[TokenRevocationRegistry, Depends(get_revocation_registry)]
UserRepositoryDep = Annotated[IUserRepository, Depends(get_user_repository)]
