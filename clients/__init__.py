# Infrastructure clients
from clients.vault_client import (
    VaultClient,
    get_database_url,
    get_valkey_url,
    get_email_config,
    get_llm_config,
    get_operator_config,
)
from clients.postgres_client import PostgresClient
from clients.valkey_client import ValkeyClient
from clients.email_client import EmailAttachment, EmailGatewayClient, EmailGatewayError
from clients.llm_client import LLMClient, LLMError, LLMResponse
