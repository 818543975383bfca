from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend.app import donation_models
from backend.app.database import Base, make_engine, session_dependency


def test_in_memory_sessions_share_one_database():
    engine = make_engine('sqlite://')
    assert isinstance(engine.pool, StaticPool)
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine)

    with Session() as first:
        first.add(donation_models.Donation(coins=1, income_eur=2.5))
        first.commit()
    with Session() as second:
        assert second.query(donation_models.Donation).count() == 1
    engine.dispose()


def test_file_database_keeps_default_pool(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'studiomatic.db'}")
    assert not isinstance(engine.pool, StaticPool)
    engine.dispose()


def test_session_dependency_closes_session():
    closed = []

    class FakeSession:
        def close(self):
            closed.append(True)

    get_session = session_dependency(FakeSession)
    gen = get_session()
    assert isinstance(next(gen), FakeSession)
    assert closed == []
    gen.close()
    assert closed == [True]
