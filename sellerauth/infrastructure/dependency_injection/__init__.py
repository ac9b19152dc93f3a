from .container import ServiceContainer, build_container, close_container

__all__ = ["ServiceContainer", "build_container", "close_container"]
