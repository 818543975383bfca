"""Initialize database (create tables). Run: python -m backend.init_db"""
from backend.app.database import engine, Base
from backend.app import auth_models, donation_models, supporter_models  # noqa: F401


def init():
    Base.metadata.create_all(bind=engine)


if __name__ == '__main__':
    print('Initializing DB...')
    init()
    print('DB initialized.')
