import asyncio
import json
from typing import Any, Dict, List, Optional, Set

from aiokafka import AIOKafkaConsumer, AIOKafkaProducer  # type: ignore
from aiokafka.admin import AIOKafkaAdminClient, NewTopic  # type: ignore
from aiokafka.errors import KafkaConnectionError  # type: ignore

from ...core.setting import get_settings
from ...utils.logging import setup_product_logging as setup_logging
from . import EventHandler, EventPublisher

logger = setup_logging(
    "product_service.events.kafka", log_level=get_settings().LOG_LEVEL
)


def _serialize_value(value: Dict[str, Any]) -> bytes:
    return json.dumps(value, default=str).encode("utf-8")


def _serialize_key(key: Optional[str]) -> Optional[bytes]:
    return key.encode("utf-8") if key else None


class KafkaEventPublisher(EventPublisher):
    """
    Fire-and-forget Kafka publisher.

    ``publish`` hands the message to a background task and returns at once.
    The task only logs the delivery outcome; failures are never raised to
    the caller and never retried. When the broker could not be reached at
    startup the publisher runs in degraded mode and drops events after
    logging them.
    """

    def __init__(
        self,
        bootstrap_servers: str,
        client_id: str,
        max_retries: int = 3,
        retry_delay: float = 2.0,
        topics: Optional[List[str]] = None,
    ):
        self.bootstrap_servers = bootstrap_servers
        self.client_id = client_id
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.topics = topics or []
        self.producer: Optional[AIOKafkaProducer] = None
        self.is_connected = False
        self._pending: Set[asyncio.Task] = set()
        self._connection_lock = asyncio.Lock()

    async def ensure_topic_exists(self, topic_name: str) -> None:
        """Create a Kafka topic if the cluster does not have it yet."""
        admin_client = AIOKafkaAdminClient(bootstrap_servers=self.bootstrap_servers)
        await admin_client.start()
        try:
            topics = await admin_client.list_topics()
            if topic_name not in topics:
                await admin_client.create_topics(
                    [NewTopic(name=topic_name, num_partitions=1, replication_factor=1)]
                )
                logger.info(
                    "Created Kafka topic",
                    extra={"topic_name": topic_name, "operation": "create_topic"},
                )
        except Exception as e:
            logger.warning(
                "Error ensuring Kafka topic exists",
                extra={
                    "topic_name": topic_name,
                    "error": str(e),
                    "operation": "ensure_topic_exists",
                },
            )
        finally:
            await admin_client.close()

    async def start(self, timeout: float = 30.0) -> None:
        """Start Kafka producer with retry logic"""
        async with self._connection_lock:
            if self.producer and self.is_connected:
                return

            self.producer = AIOKafkaProducer(
                bootstrap_servers=self.bootstrap_servers,
                client_id=self.client_id,
                value_serializer=_serialize_value,
                key_serializer=_serialize_key,
                request_timeout_ms=30000,
            )

            for attempt in range(self.max_retries):
                try:
                    logger.info(
                        "Attempting Kafka connection",
                        extra={
                            "attempt": attempt + 1,
                            "max_retries": self.max_retries,
                            "operation": "kafka_connect",
                        },
                    )
                    await asyncio.wait_for(self.producer.start(), timeout=timeout)
                    self.is_connected = True
                    logger.info("Successfully connected to Kafka")
                    break

                except (KafkaConnectionError, asyncio.TimeoutError) as e:
                    delay = self.retry_delay * (2**attempt)
                    if attempt < self.max_retries - 1:
                        logger.warning(
                            f"Kafka connection attempt {attempt + 1} failed: {e}. "
                            f"Retrying in {delay} seconds..."
                        )
                        await asyncio.sleep(delay)
                    else:
                        logger.error(
                            f"Failed to connect to Kafka after {self.max_retries} attempts. "
                            "Running in degraded mode (events will be logged but not published)"
                        )

            if not self.is_connected:
                # Release the client the failed attempts opened
                try:
                    await self.producer.stop()
                except Exception as e:
                    logger.warning(
                        "Error releasing unconnected Kafka producer",
                        extra={"error": str(e), "operation": "stop_producer"},
                    )
                finally:
                    self.producer = None
                return

        for topic in self.topics:
            await self.ensure_topic_exists(topic)

    async def stop(self, drain_timeout: float = 10.0) -> None:
        """Wait for in-flight sends, then stop the producer"""
        if self._pending:
            logger.info(
                "Waiting for in-flight Kafka sends",
                extra={"pending": len(self._pending), "operation": "drain_producer"},
            )
            await asyncio.wait(set(self._pending), timeout=drain_timeout)

        async with self._connection_lock:
            if self.producer:
                try:
                    await self.producer.stop()
                    logger.info("Kafka producer stopped")
                except Exception as e:
                    logger.warning(
                        "Error stopping Kafka producer",
                        extra={"error": str(e), "operation": "stop_producer"},
                    )
                finally:
                    self.producer = None
                    self.is_connected = False

    def publish(
        self, topic: str, key: Optional[str], value: Dict[str, Any]
    ) -> Optional[asyncio.Task]:
        """Schedule an asynchronous send and return without awaiting it"""
        if not self.is_connected or not self.producer:
            logger.warning(
                "Kafka not available, logging event instead",
                extra={
                    "topic": topic,
                    "key": key,
                    "event_data": value,
                    "operation": "publish_degraded",
                },
            )
            return None

        task = asyncio.create_task(self._send(topic, key, value))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _send(self, topic: str, key: Optional[str], value: Dict[str, Any]) -> None:
        try:
            metadata = await self.producer.send_and_wait(topic, value=value, key=key)
        except Exception as e:
            logger.error(
                f"Failed to publish event: {key}",
                extra={
                    "topic": topic,
                    "key": key,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "operation": "publish_event_failed",
                },
                exc_info=True,
            )
            return

        logger.info(
            "Event published successfully",
            extra={
                "topic": metadata.topic,
                "key": key,
                "partition": metadata.partition,
                "offset": metadata.offset,
                "operation": "publish_event",
            },
        )

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def health_check(self) -> bool:
        """Check if Kafka connection is healthy"""
        if not self.producer or not self.is_connected:
            return False
        try:
            metadata = await self.producer.client.fetch_all_metadata()
            return len(metadata.brokers()) > 0
        except Exception as e:
            logger.warning(
                "Kafka health check failed",
                extra={"error": str(e), "operation": "health_check"},
            )
            return False


class KafkaEventSubscriber:
    """Single-topic Kafka consumer that dispatches JSON messages to a handler"""

    def __init__(
        self,
        bootstrap_servers: str,
        group_id: str,
        client_id: str,
        topic: str,
        handler: EventHandler,
    ):
        self.bootstrap_servers = bootstrap_servers
        self.group_id = group_id
        self.client_id = client_id
        self.topic = topic
        self.handler = handler
        self.consumer: Optional[AIOKafkaConsumer] = None
        self._task: Optional[asyncio.Task] = None

    async def start(self, timeout: float = 30.0) -> None:
        self.consumer = AIOKafkaConsumer(
            self.topic,
            bootstrap_servers=self.bootstrap_servers,
            group_id=self.group_id,
            client_id=self.client_id,
            enable_auto_commit=True,
            auto_offset_reset="earliest",
        )
        await asyncio.wait_for(self.consumer.start(), timeout=timeout)
        self._task = asyncio.create_task(self._consume_messages())
        logger.info(
            "Subscribed to Kafka topic",
            extra={"topic": self.topic, "group_id": self.group_id, "operation": "subscribe"},
        )

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            except Exception as e:
                logger.error(
                    "Kafka consume loop failed",
                    extra={"topic": self.topic, "error": str(e), "operation": "consume"},
                )
            self._task = None
        if self.consumer:
            await self.consumer.stop()
            self.consumer = None
        logger.info("Kafka consumer stopped", extra={"topic": self.topic})

    async def _consume_messages(self) -> None:
        async for message in self.consumer:
            try:
                key = message.key.decode("utf-8") if message.key else None
                value = json.loads(message.value.decode("utf-8"))
            except (ValueError, AttributeError) as e:
                logger.warning(
                    "Skipping undecodable Kafka message",
                    extra={
                        "topic": self.topic,
                        "partition": message.partition,
                        "offset": message.offset,
                        "error": str(e),
                        "operation": "decode_message",
                    },
                )
                continue

            try:
                await self.handler.handle(key, value)
            except Exception as e:
                logger.error(
                    "Event handler error",
                    extra={
                        "topic": self.topic,
                        "partition": message.partition,
                        "offset": message.offset,
                        "error": str(e),
                        "operation": "handler_error",
                    },
                )
