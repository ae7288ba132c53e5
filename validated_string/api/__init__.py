from validated_string.api.routes import router

__all__ = ["router"]
