"""Dependency-injection container.

Wires the room store, the Watch2Gether client and the room manager from the
validated application configuration.
"""

from dependency_injector import containers, providers

from w2g_bot.services.room_store import RoomStore
from w2g_bot.services.rooms import RoomManager
from w2g_bot.services.w2g import W2GClient


class Container(containers.DeclarativeContainer):
    """DI container for the application.

    ``config`` is filled from ``Config.as_dict()`` at startup.
    """

    config = providers.Configuration()

    # Services
    room_store = providers.Singleton(RoomStore, db_path=config.store.db_path)
    w2g_client = providers.Singleton(
        W2GClient,
        api_key=config.w2g.api_key,
        api_base=config.w2g.api_base,
        timeout=config.w2g.timeout,
    )
    room_manager = providers.Singleton(
        RoomManager,
        store=room_store,
        service=w2g_client,
        room_base=config.w2g.room_base,
    )
