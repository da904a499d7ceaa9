import logging

logger = logging.getLogger(__name__)


class QueryBus:
    """Routes read-only queries (candidates, results, status) to their handlers."""

    def __init__(self):
        self.handlers = {}

    def register_handler(self, query_type, handler):
        if query_type in self.handlers:
            raise ValueError(f"Handler already registered for query type: {query_type.__name__}")
        self.handlers[query_type] = handler

    def handle(self, query):
        handler = self.handlers.get(type(query))
        if handler is None:
            raise ValueError(f"No handler registered for query type: {type(query).__name__}")
        logger.debug("Dispatching %s to %s", type(query).__name__, type(handler).__name__)
        return handler.handle(query)


query_bus = QueryBus()
