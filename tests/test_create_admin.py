from datetime import datetime

import mongomock

from votebooth.create_admin import main
from votebooth.database.connection import MongoConnector
from votebooth.security import verify_password


def test_creates_admin(settings):
    client = mongomock.MongoClient()
    connector = MongoConnector(settings, client=client)

    rc = main(["--name", "Root", "--email", "root@mail.org", "--voter-id", "ADM1", "--password", "rootpass"],
              connector=connector)

    assert rc == 0
    doc = client[settings.mongo_db]["users"].find_one({"email": "root@mail.org"})
    assert doc["isAdmin"] is True
    assert verify_password("rootpass", doc["password"])


def test_promotes_existing_voter(settings):
    client = mongomock.MongoClient()
    client[settings.mongo_db]["users"].insert_one({
        "name": "Jo", "email": "jo@mail.org", "voterId": "V1", "password": "x",
        "isAdmin": False, "hasVoted": False, "createdAt": datetime(2024, 1, 1),
    })
    connector = MongoConnector(settings, client=client)

    rc = main(["--name", "Jo", "--email", "jo@mail.org", "--voter-id", "V1", "--password", "whatever"],
              connector=connector)

    assert rc == 0
    assert client[settings.mongo_db]["users"].find_one({"email": "jo@mail.org"})["isAdmin"] is True


def test_rehash_plaintext_passwords(settings):
    client = mongomock.MongoClient()
    users = client[settings.mongo_db]["users"]
    users.insert_one({"email": "old@mail.org", "voterId": "V2", "password": "plain-secret"})
    connector = MongoConnector(settings, client=client)

    rc = main(["--rehash"], connector=connector)

    assert rc == 0
    stored = users.find_one({"email": "old@mail.org"})["password"]
    assert stored != "plain-secret"
    assert verify_password("plain-secret", stored)


def test_email_requires_other_fields(settings):
    connector = MongoConnector(settings, client=mongomock.MongoClient())

    assert main(["--email", "x@mail.org"], connector=connector) == 2
