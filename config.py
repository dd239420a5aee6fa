"""
Modulo di configurazione per l'applicazione Flask.
"""

import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Configurazione base, comune a tutti gli ambienti."""

    # Chiave segreta: in produzione deve essere sovrascritta da variabile d'ambiente.
    # Serve anche per la sessione che conserva il venditore selezionato.
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # --- CONFIGURAZIONE DATABASE MYSQL --------------------------------------
    DB_USER = os.environ.get("DB_USER", "commissioni")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "commissioni")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = os.environ.get("DB_PORT", "3306")
    DB_NAME = os.environ.get("DB_NAME", "calcolo_commissioni")

    # Stringa di connessione composta in modo parametrico
    DEFAULT_DB_URL = (
        f"mysql+pymysql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    )

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", DEFAULT_DB_URL)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # --- REGOLE DI BUSINESS --------------------------------------------------
    # Percentuale applicata al resto non allocato, finché l'utente non la cambia
    DEFAULT_REST_PERCENTAGE = os.environ.get("DEFAULT_REST_PERCENTAGE", "25")

    # Prefisso fisso dell'NCF: l'utente inserisce solo le ultime 4 cifre
    NCF_PREFIX = os.environ.get("NCF_PREFIX", "B01000")

    # Venditore creato automaticamente al primo avvio con tabella vuota
    DEFAULT_SELLER_NAME = os.environ.get("DEFAULT_SELLER_NAME", "Venditore principale")

    # Mesi sempre proposti nel selettore del riepilogo e ampiezza del trend
    RECENT_MONTHS = int(os.environ.get("RECENT_MONTHS", "4"))
    TREND_MONTHS = int(os.environ.get("TREND_MONTHS", "6"))

    # --- LOGGING -------------------------------------------------------------
    LOG_DIR = os.environ.get("LOG_DIR", str(BASE_DIR / "logs"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE_NAME = os.environ.get("LOG_FILE_NAME", "app.log")


class DevConfig(Config):
    """Configurazione per ambiente di sviluppo."""
    DEBUG = True
    ENV = "development"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class ProdConfig(Config):
    """Configurazione per ambiente di produzione."""
    DEBUG = False
    ENV = "production"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class TestConfig(Config):
    """Configurazione per la suite di test (SQLite in memoria)."""
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    LOG_LEVEL = "WARNING"
