from .serializers import serialize_user, serialize_property, serialize_task

__all__ = ["serialize_user", "serialize_property", "serialize_task"]
