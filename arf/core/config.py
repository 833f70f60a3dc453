from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_WHATSAPP_MESSAGE = (
    "Olá *{nome}*! 👋\n\n"
    "Passando para lembrar que seu acesso vence em *{dias}* (dia *{vencimento}*).\n\n"
    "O valor para renovação é de *{valor}*.\n\n"
    "Podemos confirmar sua renovação para garantir que você não fique sem sinal? 😊"
)


class Settings(BaseSettings):
    """
    Configurações globais do ARF Gestor.
    Lê automaticamente variáveis do arquivo .env (prefixo ARF_).
    """

    # Configuração base
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ARF_",
        extra="ignore",
    )

    # Projeto
    project_name: str = "ARF Gestor API"
    api_v1_str: str = "/api/v1"
    debug: bool = False

    # Banco de dados (sqlite local ou Postgres hospedado)
    database_url: str = "sqlite:///./arf.db"

    # CORS
    allowed_origins: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Datas / ciclo de vida
    timezone: Optional[str] = None  # ex.: "America/Sao_Paulo"; vazio = fuso local do servidor
    expiring_window_days: int = 7
    notify_threshold_days: int = 7

    # Moeda
    currency_symbol: str = "R$"

    # WhatsApp
    whatsapp_base_url: str = "https://wa.me"
    default_whatsapp_message: str = DEFAULT_WHATSAPP_MESSAGE

    # Backup
    backup_version: str = "1.2"

    # Logs
    log_dir: str = "log"


@lru_cache
def get_settings() -> Settings:
    """Retorna a instância de configurações globais (cacheada)."""
    return Settings()


settings = get_settings()
