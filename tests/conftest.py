pytest_plugins = ["fixednow.adapters.pytest_plugin", "pytester"]
