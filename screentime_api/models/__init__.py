# screentime_api/models/__init__.py
import importlib
import pkgutil
import pathlib


def load_all():
    """Import every model module in this package so all tables register on db.metadata."""
    for mod in pkgutil.iter_modules([str(pathlib.Path(__file__).parent)]):
        importlib.import_module(f"{__name__}.{mod.name}")
