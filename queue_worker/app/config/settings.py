from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from queue_worker.app.domain.processor_config import QueueProcessorConfig


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    sqs_queue_url: str = Field("", validation_alias="SQS_QUEUE_URL")
    aws_region: str = Field("us-east-1", validation_alias="AWS_REGION")
    # Optional override for local stacks (e.g. localstack, elasticmq).
    sqs_endpoint_url: str = Field("", validation_alias="SQS_ENDPOINT_URL")

    max_messages_per_request: int = Field(10, validation_alias="MAX_MESSAGES_PER_REQUEST")
    visibility_timeout: int = Field(300, validation_alias="VISIBILITY_TIMEOUT")
    wait_time_seconds: int = Field(20, validation_alias="WAIT_TIME_SECONDS")
    log_message_start: bool = Field(False, validation_alias="LOG_MESSAGE_START")
    log_message_end: bool = Field(False, validation_alias="LOG_MESSAGE_END")

    message_source_backend: str = Field("sqs", validation_alias="MESSAGE_SOURCE_BACKEND")
    status_store_backend: str = Field("mongo", validation_alias="STATUS_STORE_BACKEND")

    database_host: str = Field("localhost", validation_alias="DATABASE_HOST")
    database_port: int = Field(27017, validation_alias="DATABASE_PORT")
    database_user: str = Field("", validation_alias="DATABASE_USER")
    database_password: str = Field("", validation_alias="DATABASE_PASSWORD")
    database_name: str = Field("queue_worker", validation_alias="DATABASE_NAME")
    database_collection: str = Field("message_status", validation_alias="DATABASE_COLLECTION")
    database_connection_timeout_ms: int = Field(5000, validation_alias="DATABASE_CONNECTION_TIMEOUT_MS")

    # In-progress markers older than this are treated as abandoned. 0 disables expiry.
    in_progress_ttl_seconds: int = Field(3600, validation_alias="IN_PROGRESS_TTL_SECONDS")

    initial_backoff_seconds: float = Field(1.0, validation_alias="INITIAL_BACKOFF_SECONDS")
    max_backoff_seconds: float = Field(30.0, validation_alias="MAX_BACKOFF_SECONDS")
    max_connection_attempts: int = Field(10, validation_alias="MAX_CONNECTION_ATTEMPTS")
    backoff_multiplier: float = Field(2.0, validation_alias="BACKOFF_MULTIPLIER")

    message_handler: str = Field("", validation_alias="MESSAGE_HANDLER")

    # 0 means unlimited.
    max_iterations: int = Field(0, validation_alias="MAX_ITERATIONS")
    max_runtime_seconds: float = Field(0.0, validation_alias="MAX_RUNTIME_SECONDS")

    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    log_json: bool = Field(False, validation_alias="LOG_JSON")

    def to_processor_config(self) -> QueueProcessorConfig:
        return QueueProcessorConfig(
            max_messages_per_request=self.max_messages_per_request,
            visibility_timeout=self.visibility_timeout,
            wait_time_seconds=self.wait_time_seconds,
            log_message_start=self.log_message_start,
            log_message_end=self.log_message_end,
        )
