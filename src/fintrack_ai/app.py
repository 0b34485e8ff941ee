import os
from collections.abc import AsyncGenerator
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager

from fastapi import FastAPI

from fintrack_ai.api.routes import cache, categorize, chat, transactions
from fintrack_ai.cache.store import InMemoryCache
from fintrack_ai.core import settings
from fintrack_ai.llm.provider import OpenAICompatibleProvider
from fintrack_ai.logger import get_logger, setup_logging
from fintrack_ai.manager import CategorizerService
from fintrack_ai.services.category_resolver import CategoryResolver
from fintrack_ai.services.chat import ChatService, build_chat_client
from fintrack_ai.services.currencies import CurrencyResolver
from fintrack_ai.services.jobs import CategorizationJobQueue
from fintrack_ai.services.transaction_parser import TransactionIntentParser
from fintrack_ai.services.transactions import TransactionEntryService
from fintrack_ai.storage.categories import CategoryRepository
from fintrack_ai.storage.currencies import CurrencyRepository
from fintrack_ai.storage.transactions import TransactionRepository

logger = get_logger(__name__)


def create_app() -> FastAPI:
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Initializing services...")
        settings.log_environment()
        ai_settings = settings.load_ai_settings()

        provider = None
        if ai_settings.api_key:
            provider = OpenAICompatibleProvider(api_key=ai_settings.api_key, base_url=ai_settings.base_url)
        else:
            logger.info("OPENAI_API_KEY not set. Model categorization and chat will be disabled.")

        store = InMemoryCache()
        categories = CategoryRepository(os.path.join(settings.DATA_DIR, "categories.json"))
        currencies = CurrencyRepository(os.path.join(settings.DATA_DIR, "currencies.json"))
        transaction_repo = TransactionRepository(os.path.join(settings.DATA_DIR, "transactions.json"))

        service = CategorizerService(CategoryResolver(categories), store, settings=ai_settings, provider=provider)
        executor = ThreadPoolExecutor(max_workers=ai_settings.job_workers, thread_name_prefix="categorize")
        jobs = CategorizationJobQueue(service, transaction_repo, executor=executor)
        entries = TransactionEntryService(transaction_repo, service.resolver, jobs)

        currency_resolver = CurrencyResolver(currencies)
        chat_client = build_chat_client(provider, ai_settings, store)
        parser = TransactionIntentParser(chat_client, currency_resolver)

        app.state.service = service
        app.state.categories = categories
        app.state.jobs = jobs
        app.state.entries = entries
        app.state.chat = ChatService(chat_client, parser, entries, currency_resolver)

        logger.info("Services initialized.")
        yield
        logger.info("Service shutting down.")
        jobs.shutdown()

    app = FastAPI(title="FinTrack AI", lifespan=lifespan)

    app.include_router(categorize.router)
    app.include_router(cache.router)
    app.include_router(transactions.router)
    app.include_router(chat.router)

    return app


app = create_app()
