import contextlib
import logging
import sqlite3
import threading
from decimal import Decimal
from pathlib import Path
from typing import List, Protocol
import boto3
from botocore.exceptions import BotoCoreError, ClientError
from config import Settings
from errors import StoreError
from models import Message

logger = logging.getLogger(__name__)

class MessageStore(Protocol):
    def insert(self, message: Message) -> None: ...

    def list_all(self) -> List[Message]: ...

# Local target: one SQLite file, one row per message
class SQLiteMessageStore:
    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()
        self._shared = None
        if path == ":memory:":
            self._shared = sqlite3.connect(path, check_same_thread=False)
        else:
            try:
                Path(path).parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StoreError(f"Cannot create database directory: {e}") from e
        self._create_table()

    def _connect(self):
        if self._shared is not None:
            return self._shared
        return sqlite3.connect(self.path)

    # Only the shared in-memory connection needs serializing
    def _guard(self):
        if self._shared is not None:
            return self._lock
        return contextlib.nullcontext()

    def _release(self, conn):
        if conn is not self._shared:
            conn.close()

    def _create_table(self):
        with self._guard():
            conn = self._connect()
            try:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS messages (
                      id TEXT PRIMARY KEY,
                      content TEXT NOT NULL,
                      created_at INTEGER NOT NULL
                    )
                    """
                )
                conn.execute(
                    "CREATE INDEX IF NOT EXISTS idx_messages_created_at ON messages(created_at DESC)"
                )
                conn.commit()
            except sqlite3.Error as e:
                raise StoreError(f"Create table error: {e}") from e
            finally:
                self._release(conn)

    def insert(self, message: Message) -> None:
        with self._guard():
            conn = self._connect()
            try:
                # Connection as context manager commits, or rolls back on error
                with conn:
                    conn.execute(
                        "INSERT INTO messages (id, content, created_at) VALUES (?, ?, ?)",
                        (message.id, message.content, message.created_at)
                    )
            except sqlite3.Error as e:
                raise StoreError(f"Insert error: {e}") from e
            finally:
                self._release(conn)

    def list_all(self) -> List[Message]:
        with self._guard():
            conn = self._connect()
            try:
                rows = conn.execute(
                    "SELECT id, content, created_at FROM messages ORDER BY created_at DESC"
                ).fetchall()
            except sqlite3.Error as e:
                raise StoreError(f"Query error: {e}") from e
            finally:
                self._release(conn)

        return [Message(id=row[0], content=row[1], created_at=row[2]) for row in rows]

    def close(self):
        if self._shared is not None:
            self._shared.close()
            self._shared = None

# DynamoDB returns numbers as Decimal
def _item_to_message(item: dict) -> Message:
    created_at = item["createdAt"]
    if isinstance(created_at, Decimal):
        created_at = int(created_at)
    return Message(id=item["id"], content=item["content"], created_at=created_at)

# Cloud target: DynamoDB table keyed on id
class DynamoMessageStore:
    def __init__(self, table):
        self.table = table

    def insert(self, message: Message) -> None:
        try:
            self.table.put_item(Item=message.to_item())
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"Put item error: {e}") from e

    def list_all(self) -> List[Message]:
        items = []
        scan_kwargs = {}
        try:
            while True:
                response = self.table.scan(**scan_kwargs)
                items.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                scan_kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"Scan error: {e}") from e

        messages = [_item_to_message(item) for item in items]
        # newest -> oldest
        return sorted(messages, key=lambda m: m.created_at, reverse=True)

def dynamodb_resource(settings: Settings):
    return boto3.resource(
        "dynamodb",
        region_name=settings.aws_region,
        endpoint_url=settings.dynamodb_endpoint
    )

# Create the messages table if it doesn't exist
def create_table(dynamodb, table_name: str):
    existing_tables = [table.name for table in dynamodb.tables.all()]
    if table_name in existing_tables:
        logger.info("Table '%s' already exists.", table_name)
        return dynamodb.Table(table_name)

    table = dynamodb.create_table(
        TableName=table_name,
        KeySchema=[
            {"AttributeName": "id", "KeyType": "HASH"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "id", "AttributeType": "S"},
        ],
        BillingMode="PAY_PER_REQUEST"
    )
    logger.info("Table '%s' created.", table_name)

    table.wait_until_exists()
    logger.info("Table '%s' ready to use.", table_name)
    return table

# Pick the store for the configured deployment target
def build_store(settings: Settings) -> MessageStore:
    if settings.environment == "aws":
        dynamodb = dynamodb_resource(settings)
        # A custom endpoint means DynamoDB Local, which starts empty
        if settings.dynamodb_endpoint:
            try:
                return DynamoMessageStore(create_table(dynamodb, settings.table_name))
            except (ClientError, BotoCoreError) as e:
                raise StoreError(f"Create table error: {e}") from e
        return DynamoMessageStore(dynamodb.Table(settings.table_name))

    return SQLiteMessageStore(settings.database_path)
