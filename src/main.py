from src.app import AppSettings, run_planner

__all__ = ["main"]


def main() -> None:
    """Entry point for the application."""
    settings = AppSettings.from_env()
    run_planner(settings)


if __name__ == "__main__":
    main()
