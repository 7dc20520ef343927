try:
    from cli.app import cli
except ModuleNotFoundError:
    # console_script로 실행될 때 프로젝트 루트를 sys.path에 추가
    import os
    import sys

    sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
    from cli.app import cli


def main():
    """Entry point for the invc CLI. Delegates to cli.app:cli."""
    cli()


if __name__ == "__main__":
    main()
