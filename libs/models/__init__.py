from .base_model_mixin import AutoIdMixin, BaseModel

__all__ = ["AutoIdMixin", "BaseModel"]
