import importlib
from pathlib import Path
from config.database import engine, SessionLocal, Base

API_DIR = Path(__file__).parent.parent / "api"

# Dictionary to store loaded models
models = {}

# Import every `*_model.py` under `api/` by package name so each is loaded once
def scan_models(directory: Path = API_DIR):
    for item in sorted(directory.rglob("*_model.py")):
        relative = item.relative_to(directory.parent).with_suffix("")
        module = importlib.import_module(".".join(relative.parts))

        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if hasattr(attr, "__tablename__"):
                models[attr.__tablename__] = attr
    return models

scan_models()

def init_db():
    Base.metadata.create_all(bind=engine)

# Exporting components
__all__ = ["engine", "SessionLocal", "Base", "models", "init_db"]
