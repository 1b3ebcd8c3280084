from typing import Optional, Sequence

from pytgconfig.cli import cli
from pytgconfig.pipelines import testgrid_config  # noqa: F401


def main(args: Optional[Sequence[str]] = None):
    cli(args)


if __name__ == "__main__":
    main()
