"""Resolves NLU intents into user-profile store operations.

Usage:
    from intent_resolver.gateway import DatabaseGateway
    from intent_resolver.resolution import Dispatcher

    async with DatabaseGateway(base_url="http://profiles:27017") as gateway:
        answer = await Dispatcher(gateway).resolve(message)
"""

__version__ = "1.0.0"
