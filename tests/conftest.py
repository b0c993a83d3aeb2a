import pytest


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "-S",
        "--search",
        action="store_true",
        default=False,
        dest="run_search_slow",
        help="Run tests marked with @pytest.mark.search_slow (clock-driven search checks)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    if config.getoption("run_search_slow"):
        return
    skip_slow = pytest.mark.skip(reason="use -S/--search to enable search smoke tests")
    for item in items:
        if "search_slow" in item.keywords:
            item.add_marker(skip_slow)
