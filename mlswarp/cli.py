from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Optional
import typer, yaml
from rich import print
from rich.console import Console
from rich.logging import RichHandler
from .config import load_config
from .deform.kinds import Deformation
from .geometry.controls import ControlPairs, ControlPointError, parse_pair
from .io.image import draw_controls, read_image, write_image
from .warp.dense import reverse_dense
from .warp.sparse import reverse_sparse

app = typer.Typer(add_completion=False, help="Moving least squares image warping (mlswarp)")

PAIR_HELP = "Control correspondence 'x1,y1:x2,y2' (source -> destination), repeatable"

def _setup_logging(verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s",
                        datefmt="[%X]", handlers=[RichHandler(console=Console(stderr=True), show_path=False)], force=True)

def _pairs(pair: List[str]) -> ControlPairs:
    pairs = ControlPairs()
    for text in pair:
        pairs.add(*parse_pair(text))
    pairs.arrays()  # fail before touching any image
    return pairs

def _fail(msg: str):
    print(f"[red]Error:[/red] {msg}")
    raise typer.Exit(code=1)

@app.command()
def warp(image: Path = typer.Argument(..., help="Source image"),
         output: Path = typer.Argument(..., help="Where to write the warped image"),
         pair: List[str] = typer.Option(..., "--pair", "-p", help=PAIR_HELP),
         kind: str = typer.Option("rigid", "--kind", "-k", help="affine | similarity | rigid"),
         sparse: int = typer.Option(0, help="Evaluate MLS every N pixels only (0 = dense)"),
         config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML warp config"),
         parallel: Optional[bool] = typer.Option(None, "--parallel/--sequential", help="Override config.parallel"),
         show_controls: bool = typer.Option(False, help="Draw destination control points on the output"),
         verbose: bool = typer.Option(False, "--verbose", "-v")):
    """
    Warp IMAGE so that each source control point lands on its destination.
    """
    _setup_logging(verbose)
    try:
        pairs = _pairs(pair)
        deformation = Deformation.parse(kind)
        cfg = load_config(config)
        if parallel is not None:
            cfg = cfg.model_copy(update={"parallel": parallel})
        img = read_image(image)
        if sparse > 0:
            out = reverse_sparse(img, pairs.src, pairs.dst, deformation, subresolution=sparse, config=cfg)
        else:
            out = reverse_dense(img, pairs.src, pairs.dst, deformation, config=cfg)
        if show_controls:
            out = draw_controls(out, pairs.dst)
        write_image(output, out)
    except (ValueError, FileNotFoundError, RuntimeError, yaml.YAMLError) as e:
        _fail(str(e))
    print("[green]Saved warped image[/green]", str(output))

@app.command()
def point(x: float, y: float,
          pair: List[str] = typer.Option(..., "--pair", "-p", help=PAIR_HELP),
          kind: str = typer.Option("rigid", "--kind", "-k", help="affine | similarity | rigid"),
          alpha: float = typer.Option(1.0, help="Weight exponent")):
    """
    Print where the point (X, Y) moves under the deformation.
    """
    try:
        pairs = _pairs(pair)
        out = Deformation.parse(kind).evaluate(pairs.src, pairs.dst, (x, y), alpha)
    except (ControlPointError, ValueError) as e:
        _fail(str(e))
    print(f"{out[0]:.6g} {out[1]:.6g}")

if __name__ == "__main__":
    app()
