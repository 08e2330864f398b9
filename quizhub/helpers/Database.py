from pymongo import MongoClient
from pymongo.errors import ConnectionFailure
import os
import certifi

from dotenv import load_dotenv

load_dotenv()

class MongoDB:
    client: MongoClient = None

    @classmethod
    def connect(cls, uri: str):
        cls.client = MongoClient(uri, tlsCAFile=certifi.where())

    @classmethod
    def get_database(cls, db_name: str = None):
        database_name = db_name or os.getenv('DB_NAME')
        if not database_name:
            raise ValueError("DB_NAME environment variable is not set")
        if cls.client is None:
            raise RuntimeError("MongoDB client is not connected")
        return cls.client[database_name]

    @classmethod
    def connection_status(cls):
        try:
            cls.client.admin.command('ping')
            return {"status": "connected", "db": os.getenv('DB_NAME')}
        except (ConnectionFailure, AttributeError):
            return {"status": "disconnected", "db": os.getenv('DB_NAME')}

    @classmethod
    def close(cls):
        if cls.client is not None:
            cls.client.close()
            cls.client = None
