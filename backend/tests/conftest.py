import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from talentboard.config import settings
from talentboard.database import get_db, get_engine, init_db
from talentboard.main import app


@pytest.fixture
def test_engine(tmp_path):
    engine = get_engine(f"sqlite:///{tmp_path / 'test.sqlite'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def test_db(test_engine):
    TestSession = sessionmaker(bind=test_engine, autoflush=False, autocommit=False)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()


@pytest.fixture
def uploads_dir(tmp_path):
    """Not created up front: the first stored upload creates it."""
    original = settings.uploads_dir
    settings.uploads_dir = tmp_path / "uploads"
    yield settings.uploads_dir
    settings.uploads_dir = original


@pytest.fixture
def client(test_db, uploads_dir):
    return TestClient(app)


@pytest.fixture
def job_payload():
    def make(**overrides):
        payload = {
            "title": "Backend Engineer",
            "company": {"name": "Initech", "website": "https://initech.example"},
            "description": "Build and run services.",
            "requirements": ["3 years Python"],
            "responsibilities": ["Own the API"],
            "jobType": "Full-time",
            "experienceLevel": "Mid Level",
            "location": "Remote, US",
            "remote": False,
            "salary": {"min": 90000, "max": 120000},
            "primaryTechnology": "Python",
            "requiredSkills": ["Python", "SQL"],
            "benefits": ["Health"],
            "status": "active",
            "applicationDeadline": "2030-01-31",
        }
        payload.update(overrides)
        return payload

    return make


@pytest.fixture
def create_job(client, job_payload):
    def create(**overrides):
        r = client.post("/api/jobs", json=job_payload(**overrides))
        assert r.status_code == 201, r.text
        return r.json()

    return create


@pytest.fixture
def create_candidate(client):
    def create(name="Ada Lovelace", email="ada@example.com", **fields):
        r = client.post("/api/candidate", json={"name": name, "email": email, **fields})
        assert r.status_code == 201, r.text
        return r.json()

    return create
