from .batches import all_visible, delete_all, none_visible, put_all, staged_entities, visible

__all__ = ["all_visible", "delete_all", "none_visible", "put_all", "staged_entities", "visible"]
