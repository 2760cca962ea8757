# ragindex/corpus.py
"""
Seed knowledge base loaded at process start.

Texts are pre-normalized keyword lists in Russian, so they are meant to be
indexed with the cyrillic script; Latin product names are filtered out.
"""

SEED_SCRIPT = "cyrillic"

SEED_DOCUMENTS = [
    "RAG Retrieval Augmented Generation архитектура поиск информация генерация текст",
    "RAG сначала ищет релевантные документы базе знаний затем использует генерацию ответа",
    "Векторный поиск позволяет находить семантически похожие тексты точное совпадение слов",
    "Telegram боты создаются BotFather используют API отправки сообщений",
    "Go Golang статически типизированный язык программирования сборщик мусора поддержка многопоточности",
    "Docker позволяет упаковывать приложения контейнеры удобное развертывание",
    "API ключи необходимы доступа сервисам искусственного интеллекта DeepSeek OpenRouter",
    "Программирование разработка программ обеспечение компьютеров алгоритмы код",
    "Искусственный интеллект AI машинное обучение нейронные сети данные обучение модели",
    "База данных хранение информации структурированные данные запросы SQL",
    "Веб разработка создание сайтов приложений интерфейсы backend frontend",
    "Мобильные приложения iOS Android разработка телефоны планшеты",
    "Облачные вычисления сервера хранение данных AWS Google Cloud Azure",
    "Блокчейн криптовалюты Bitcoin Ethereum смарт контракты децентрализация",
]
