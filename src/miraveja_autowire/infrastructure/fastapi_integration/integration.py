from typing import Awaitable, Callable, Type, TypeVar

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from miraveja_autowire.domain import IInjector

T = TypeVar("T")


def create_autowired_dependency(injector: IInjector, component_type: Type[T]) -> Callable[[], T]:
    """Create a FastAPI Depends() callable returning an autowired component.

    Each call creates the component with its no-argument constructor and
    injects its autowired properties.

    Args:
        injector: The injector to autowire the component with.
        component_type: The component class to create.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> class UserPage(Component):
        ...     repository: UserRepository = autowire()
        >>>
        >>> get_user_page = create_autowired_dependency(injector, UserPage)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(page: UserPage = Depends(get_user_page)):
        ...     return await page.repository.get_all()
    """

    def dependency() -> T:
        """Create and autowire the component."""
        component = component_type()
        injector.inject(component)
        return component

    return dependency


def create_request_autowired_dependency(component_type: Type[T]) -> Callable[[Request], T]:
    """Create a FastAPI dependency autowiring with the request's injector.

    Requires the AutowireMiddleware to be installed.

    Args:
        component_type: The component class to create.

    Returns:
        A callable that autowires with the injector stored on the request.

    Example:
        >>> app.add_middleware(AutowireMiddleware, injector=injector)
        >>>
        >>> get_user_page = create_request_autowired_dependency(UserPage)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(page: UserPage = Depends(get_user_page)):
        ...     return await page.repository.get_all()
    """

    def request_dependency(request: Request) -> T:
        """Create the component and autowire it with the request's injector."""
        if not hasattr(request.state, "autowire_injector"):
            raise RuntimeError(
                "Request does not have an autowire injector. Did you forget to add AutowireMiddleware?"
            )
        injector: IInjector = request.state.autowire_injector
        component = component_type()
        injector.inject(component)
        return component

    return request_dependency


class AutowireMiddleware(BaseHTTPMiddleware):
    """Middleware exposing the injector to every request.

    The injector is accessible via `request.state.autowire_injector`.

    Attributes:
        injector: The injector shared by all requests.

    Example:
        >>> app = FastAPI()
        >>> app.add_middleware(AutowireMiddleware, injector=create_injector(container))
    """

    def __init__(self, app: FastAPI, injector: IInjector):
        """Initialize the middleware with the shared injector.

        Args:
            app: The FastAPI/Starlette application.
            injector: The injector to expose on requests.
        """
        super().__init__(app)
        self.injector = injector

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Attach the injector to the request and execute the endpoint.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or endpoint handler.

        Returns:
            The response from the endpoint.
        """
        request.state.autowire_injector = self.injector
        return await call_next(request)
