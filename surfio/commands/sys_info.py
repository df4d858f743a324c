import argparse

from .. import sys_info


def run():
    """Run the ``surfio-sys_info`` command-line helper.

    Prints platform, hardware and dependency versions, which is the
    information needed to reproduce a reader problem.
    """
    parser = argparse.ArgumentParser(
        prog=f"{__package__.split('.')[0]}-sys_info",
        description="Print system and dependency information.",
    )
    parser.add_argument(
        "--developer",
        help="also list the optional test/style dependencies",
        action="store_true",
    )
    args = parser.parse_args()

    sys_info(developer=args.developer)


if __name__ == "__main__":
    run()
