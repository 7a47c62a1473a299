"""
Texture Explorer - Entry Point

Usage:
    python -m texture_explorer [options]

Options:
    --size WxH                       Window / pixel grid size (default 500x500)
    --domain XMIN XMAX YMIN YMAX     Coordinate domain (default -100 100 -100 100)
    --texture N                      Same formula (0-9) on all three channels
    --red N | --green N | --blue N   One channel formula (0-9, or "off")
    --random                         Random formula per channel
    --seed N                         Seed for --random and the R key
    --snap PATH                      Render headless, save PNG to PATH, exit
    --list                           Show the formula catalogue
    -h, --help                       Show this help

Examples:
    python -m texture_explorer
    python -m texture_explorer --texture 3
    python -m texture_explorer --red 8 --green off --blue 5 --domain -10 10 -10 10
    python -m texture_explorer --random --seed 7 --snap texture.png
"""

import sys

import numpy as np

from .channels import CHANNELS
from .errors import TextureError
from .explorer import DEFAULT_HEIGHT, DEFAULT_WIDTH, TextureExplorer
from .formulas import FORMULAS, OFF


def _parse_index(value):
    if value.lower() == "off":
        return OFF
    return int(value)


def parse_args(args):
    """
    Parse command-line arguments into an options dict.

    Raises:
        ValueError: on an unknown option or a malformed value
    """
    opts = {
        "width": DEFAULT_WIDTH,
        "height": DEFAULT_HEIGHT,
        "domain": None,
        "texture": None,
        "channels": {},
        "random": False,
        "seed": None,
        "snap": None,
        "list": False,
        "help": False,
    }
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--size" and i + 1 < len(args):
            parts = args[i + 1].lower().split("x")
            if len(parts) != 2:
                raise ValueError(f"--size expects WxH, got {args[i + 1]!r}")
            opts["width"], opts["height"] = int(parts[0]), int(parts[1])
            i += 2
        elif arg == "--domain" and i + 4 < len(args):
            opts["domain"] = tuple(float(v) for v in args[i + 1:i + 5])
            i += 5
        elif arg == "--texture" and i + 1 < len(args):
            opts["texture"] = int(args[i + 1])
            i += 2
        elif arg in ("--red", "--green", "--blue") and i + 1 < len(args):
            opts["channels"][arg[2:]] = _parse_index(args[i + 1])
            i += 2
        elif arg == "--random":
            opts["random"] = True
            i += 1
        elif arg == "--seed" and i + 1 < len(args):
            opts["seed"] = int(args[i + 1])
            if opts["seed"] < 0:
                raise ValueError(f"--seed expects a non-negative integer, got {args[i + 1]}")
            i += 2
        elif arg == "--snap" and i + 1 < len(args):
            opts["snap"] = args[i + 1]
            i += 2
        elif arg == "--list":
            opts["list"] = True
            i += 1
        elif arg in ("--help", "-h"):
            opts["help"] = True
            i += 1
        else:
            raise ValueError(f"Unknown or incomplete argument: {arg}")
    return opts


def build_explorer(opts):
    """Create a TextureExplorer configured from parsed options."""
    kwargs = {}
    if opts["domain"] is not None:
        kwargs["domain"] = opts["domain"]
    explorer = TextureExplorer(
        opts["width"], opts["height"],
        rng=np.random.default_rng(opts["seed"]),
        **kwargs,
    )
    # Later options override earlier ones: random, preset, then channels
    if opts["random"]:
        explorer.randomize()
    if opts["texture"] is not None:
        explorer.set_texture(opts["texture"])
    for name, index in opts["channels"].items():
        explorer.set_channel(name, index)
    return explorer


def list_formulas():
    print("\nFormula catalogue:")
    for ch in CHANNELS:
        print(f"\n  [{ch.value}]")
        for index, (expr, _fn) in enumerate(FORMULAS[ch.value]):
            print(f"    {index:>3d}  {expr}")
    print()


def snap(explorer, path):
    """Headless mode: render one frame, save it, exit."""
    print(f"Headless snap: {explorer.width}x{explorer.height}")
    print(explorer.describe())
    explorer.save(path)
    print(f"  rendered in {explorer.last_render_ms:.0f} ms, saved: {path}")


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    try:
        opts = parse_args(args)
    except ValueError as e:
        print(e)
        print("Use --help to see available options")
        return 2

    if opts["help"]:
        print(__doc__)
        return 0
    if opts["list"]:
        list_formulas()
        return 0

    try:
        explorer = build_explorer(opts)
    except TextureError as e:
        print(f"[TX] {e}")
        return 2

    if opts["snap"]:
        try:
            snap(explorer, opts["snap"])
        except TextureError as e:
            print(f"[TX] {e}")
            return 1
        return 0

    from .viewer import Viewer

    print("Starting Texture Explorer")
    print(f"  Size: {explorer.width}x{explorer.height}")
    print(explorer.describe())
    print()

    viewer = Viewer(explorer=explorer)
    viewer.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
