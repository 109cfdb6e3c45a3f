#!filepath: lintrain/cli.py
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
import typer
from rich import print

from lintrain import __version__
from lintrain.config.app_config import AppConfig
from lintrain.data.instance import instances_from_frame
from lintrain.models.artifact import resolve_model_artifact, save_model_artifact
from lintrain.training.trainer import MulticlassModelTrainer
from lintrain.utils.errors import ConfigurationError
from lintrain.utils.logger import logs

app = typer.Typer(help="Multiclass online linear trainer CLI")


def _parse_opts(opts: List[str]) -> Dict[str, Optional[str]]:
    """
    `--opt key=value` → {key: value}; a bare `--opt key` is a flag.
    """
    parsed: Dict[str, Optional[str]] = {}
    for item in opts:
        key, sep, value = item.partition("=")
        if not key:
            raise typer.BadParameter(f"bad option {item!r}, expected key=value")
        parsed[key.strip()] = value if sep else None
    return parsed


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def train(
    data: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV file"),
    label_column: str = typer.Option("label", help="label column in the CSV"),
    out: Path = typer.Option(..., help="artifact output directory"),
    categories: Optional[str] = typer.Option(
        None, help="comma separated class labels (default: labels seen in DATA)"
    ),
    config: Optional[Path] = typer.Option(None, exists=True, help="YAML config"),
    opt: List[str] = typer.Option([], help="trainer option key=value (repeatable)"),
):
    """
    训练 one-vs-all 线性模型并写出 artifact
    """
    try:
        app_cfg = AppConfig.load(config, overrides=_parse_opts(opt))
    except ConfigurationError as e:
        print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(code=2)

    logs.configure(app_cfg.log)

    frame = pd.read_csv(data)
    if categories:
        cats = [c.strip() for c in categories.split(",") if c.strip()]
    else:
        cats = sorted(frame[label_column].astype(str).unique())

    try:
        trainer = MulticlassModelTrainer(app_cfg.trainer, cats)
    except ConfigurationError as e:
        print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(code=2)

    print(f"[green]Training {app_cfg.trainer.model.value} on {len(frame)} rows[/green]")

    model = trainer.train(instances_from_frame(frame, label_column))
    artifact = save_model_artifact(model, out)

    print(f"[blue]Saved model → {artifact.path}[/blue]")


@app.command()
def inspect(artifact_dir: Path = typer.Argument(..., exists=True, file_okay=False)):
    """
    打印 artifact 元信息
    """
    artifact = resolve_model_artifact(artifact_dir)

    print(f"model_type: {artifact.model_type}")
    print(f"categories: {', '.join(artifact.categories)}")
    print(f"created_at: {artifact.created_at.isoformat()}")
    print(f"nonzero:    {artifact.nonzero}")
    print(f"args:       {artifact.arg_string}")


if __name__ == "__main__":
    app()

# python -m lintrain.cli train data.csv --out models/run1 --opt model=linear_svm
