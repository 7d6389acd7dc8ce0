import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from secret_santa.db.models import Base
from secret_santa.services.roster import Participant


@pytest.fixture
def session():
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    Base.metadata.create_all(engine)
    db_session = sessionmaker(bind=engine, expire_on_commit=False)()
    yield db_session
    db_session.close()


def make_participants(*names):
    return [Participant(id=index, name=name) for index, name in enumerate(names, start=1)]


def follow_cycle(assignment_set):
    """Walk receiver links from the first giver and return the ids visited."""
    receivers = {a.giver.id: a.receiver.id for a in assignment_set}
    start = next(iter(assignment_set)).giver.id
    visited = [start]
    current = receivers[start]
    while current != start and len(visited) <= len(receivers):
        visited.append(current)
        current = receivers[current]
    return visited
