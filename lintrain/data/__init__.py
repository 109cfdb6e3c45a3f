from .instance import LabeledInstance, instances_from_frame

__all__ = ["LabeledInstance", "instances_from_frame"]
