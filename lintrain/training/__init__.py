from .assembler import assemble_multiclass_model
from .postprocess import finalize
from .trainer import MulticlassModelTrainer

__all__ = ["MulticlassModelTrainer", "assemble_multiclass_model", "finalize"]
