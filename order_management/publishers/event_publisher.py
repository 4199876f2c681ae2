"""
Event Publishers
"""
import pika
import json
from abc import ABC, abstractmethod
from typing import Dict, List, Union

from order_management.logger import get_logger
from order_management.schemas.event import EventEnvelope, OrderEvent

logger = get_logger(__name__)


class EventPublisher(ABC):
    """Fire-and-forget publisher of domain events"""

    def __init__(self, source: str = "order-management-service"):
        self.source = source

    def build_event(self, routing_key: Union[OrderEvent, str], data: Dict) -> EventEnvelope:
        """Wrap event data into the standard envelope"""
        return EventEnvelope(event_type=OrderEvent(routing_key).value, source=self.source, data=data)

    @abstractmethod
    def publish(self, routing_key: Union[OrderEvent, str], data: Dict) -> bool:
        """
        Publish an event

        Args:
            routing_key: Event routing key
            data: Event payload

        Returns:
            True if published successfully, False otherwise
        """


class InMemoryEventPublisher(EventPublisher):
    """Mock broker that logs and keeps every published event"""

    def __init__(self, source: str = "order-management-service"):
        super().__init__(source)
        self.published: List[EventEnvelope] = []

    def publish(self, routing_key: Union[OrderEvent, str], data: Dict) -> bool:
        event = self.build_event(routing_key, data)
        self.published.append(event)
        logger.info("event_published", mock=True, event_type=event.event_type, event_id=event.event_id)
        return True

    def events_of(self, routing_key: Union[OrderEvent, str]) -> List[EventEnvelope]:
        """Published events with the given routing key, oldest first"""
        key = OrderEvent(routing_key).value
        return [event for event in self.published if event.event_type == key]


class RabbitMQEventPublisher(EventPublisher):
    """Publisher for sending events to a RabbitMQ topic exchange"""

    def __init__(self, rabbitmq_url: str, exchange: str, source: str = "order-management-service"):
        super().__init__(source)
        self.rabbitmq_url = rabbitmq_url
        self.exchange = exchange

    def publish(self, routing_key: Union[OrderEvent, str], data: Dict) -> bool:
        try:
            event = self.build_event(routing_key, data)

            # Connect to RabbitMQ
            connection = pika.BlockingConnection(
                pika.URLParameters(self.rabbitmq_url)
            )
            try:
                channel = connection.channel()

                channel.exchange_declare(
                    exchange=self.exchange,
                    exchange_type='topic',
                    durable=True
                )

                # Enable publisher confirms
                channel.confirm_delivery()

                channel.basic_publish(
                    exchange=self.exchange,
                    routing_key=event.event_type,
                    body=json.dumps(event.model_dump(mode="json")),
                    properties=pika.BasicProperties(
                        delivery_mode=2,  # Persistent message
                        content_type='application/json',
                        correlation_id=event.event_id
                    ),
                    mandatory=False
                )
            finally:
                connection.close()

            logger.info("event_published", event_type=event.event_type, event_id=event.event_id)
            return True

        except pika.exceptions.AMQPError as e:
            logger.error("event_publish_failed", routing_key=str(routing_key), error=repr(e))
            return False
        except Exception as e:
            logger.exception("event_publish_failed", routing_key=str(routing_key), error=str(e))
            return False
