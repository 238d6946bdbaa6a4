import asyncio

from sshdeck.config_store import SSHConfigStore
from sshdeck.settings import Settings
from sshdeck.tui.app import SSHDeckApp, parse_args


def _make_app(config_path, tmp_path, sort=None):
    settings = Settings(str(tmp_path / "settings.json"))
    if sort:
        settings.set_setting("ui.sort", sort)
    return SSHDeckApp(store=SSHConfigStore(str(config_path)), settings=settings)


def test_app_loads_hosts_in_file_order(sample_config, tmp_path):
    app = _make_app(sample_config, tmp_path)

    async def scenario():
        async with app.run_test() as pilot:
            await pilot.pause()
            assert [h.name for h in app.hosts] == ["*", "alpha", "beta", "gamma"]
            assert app.host_table.row_count == 4
            assert app.get_selected_host().name == "*"

    asyncio.run(scenario())


def test_app_applies_sort_preset(sample_config, tmp_path):
    app = _make_app(sample_config, tmp_path, sort="name-desc")

    async def scenario():
        async with app.run_test() as pilot:
            await pilot.pause()
            assert [h.name for h in app.hosts] == ["gamma", "beta", "alpha", "*"]

    asyncio.run(scenario())


def test_app_filters_by_tag(sample_config, tmp_path):
    app = _make_app(sample_config, tmp_path)

    async def scenario():
        async with app.run_test() as pilot:
            await pilot.pause()
            app.filter_input.value = "tag:db"
            await pilot.pause()
            assert [h.name for h in app.filtered_hosts] == ["gamma"]
            assert app.host_table.row_count == 1

    asyncio.run(scenario())


def test_app_delete_host_rewrites_config(sample_config, tmp_path):
    app = _make_app(sample_config, tmp_path)

    async def scenario():
        async with app.run_test() as pilot:
            await pilot.pause()
            await app.delete_host("beta")
            await pilot.pause()
            assert [h.name for h in app.hosts] == ["*", "alpha", "gamma"]

    asyncio.run(scenario())
    assert "Host beta" not in sample_config.read_text()


def test_app_reports_missing_host_on_delete(sample_config, tmp_path):
    app = _make_app(sample_config, tmp_path)

    async def scenario():
        async with app.run_test() as pilot:
            await pilot.pause()
            await app.delete_host("nope")
            await pilot.pause()
            assert app.status_bar.has_class("error")
            assert len(app.hosts) == 4

    asyncio.run(scenario())


def test_parse_args_defaults():
    args = parse_args([])
    assert args.config is None
    assert args.log_level == "WARNING"
