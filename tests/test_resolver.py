from fintrack_ai.services.category_resolver import CategoryResolver
from fintrack_ai.storage.categories import CategoryRepository


def test_resolve_cleans_and_creates_once() -> None:
    resolver = CategoryResolver(CategoryRepository())

    first = resolver.resolve('"transportasi"', user_id=3)
    second = resolver.resolve("Transportasi", user_id=3)

    assert first is not None
    assert first.name == "Transportasi"
    assert first.icon == "CarIcon"
    assert first.description == "Auto-generated category"
    assert first.id == second.id
    assert len(resolver.repository) == 1


def test_categories_are_scoped_per_user() -> None:
    resolver = CategoryResolver(CategoryRepository())

    mine = resolver.find_or_create("Makanan", user_id=1)
    yours = resolver.find_or_create("Makanan", user_id=2)

    assert mine.id != yours.id


def test_resolve_empty_output() -> None:
    resolver = CategoryResolver(CategoryRepository())
    assert resolver.resolve("  ") is None
    assert len(resolver.repository) == 0


def test_unclear_names_become_catch_all() -> None:
    resolver = CategoryResolver(CategoryRepository())

    assert resolver.find_or_create("Miscellaneous").name == "Lain-lain"
    assert resolver.find_or_create("lainnya").name == "Lain-lain"
    assert resolver.catch_all().name == "Lain-lain"
    assert len(resolver.repository) == 1


def test_new_category_gets_keyword_icon() -> None:
    resolver = CategoryResolver(CategoryRepository())
    category = resolver.find_or_create("kopi")
    assert category.name == "Kopi"
    assert category.icon == "CoffeeIcon"
