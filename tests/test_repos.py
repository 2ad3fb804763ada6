import pytest

from azport.models import Category, Product
from azport.repos import category_repo, job_opening_repo, product_repo, user_repo


def test_user_repo_ensure_admin_is_idempotent(db):
    user, created = user_repo.ensure_admin(db, "admin", "whatever-else")
    assert created is False
    assert user.username == "admin"
    other, created = user_repo.ensure_admin(db, "second", "second-pass-1")
    assert created is True
    assert user_repo.count(db) == 2
    assert other.password_hash != "second-pass-1"


def test_set_password_unknown_user(db):
    assert user_repo.set_password(db, 9999, "anything-long") is None


def test_category_get_all_sorted_and_get_or_create(db):
    names = [c.name for c in category_repo.get_all(db)]
    assert names == sorted(names)
    existing = category_repo.get_or_create(db, "Fluid Control")
    assert existing.id == category_repo.get_by_name(db, "Fluid Control").id
    fresh = category_repo.get_or_create(db, "Brand New")
    assert fresh.id is not None
    assert category_repo.count(db) == len(names) + 1


def test_seed_default_categories_skips_when_populated(db):
    _, created = category_repo.seed_default_categories(db, [("Extra", "x")])
    assert created == 0
    assert category_repo.get_by_name(db, "Extra") is None


def test_reassign_and_delete_moves_products(db):
    source = category_repo.get_by_name(db, "Fluid Control")
    target = category_repo.get_by_name(db, "Measurement Tools")
    source_id = source.id
    moved = category_repo.reassign_and_delete(db, source, target)
    assert moved == 2
    db.expire_all()
    assert category_repo.get_by_id(db, source_id) is None
    assert category_repo.count_products(db, target.id) == 3


def test_reassign_and_delete_rolls_back_on_failure(monkeypatch, db):
    source = category_repo.get_by_name(db, "Fluid Control")
    target = category_repo.get_by_name(db, "Measurement Tools")
    source_id, target_id = source.id, target.id

    def failing_commit():
        raise RuntimeError("disk full")

    monkeypatch.setattr(db, "commit", failing_commit)
    with pytest.raises(RuntimeError):
        category_repo.reassign_and_delete(db, source, target)
    monkeypatch.undo()

    db.expire_all()
    assert db.query(Category).filter(Category.id == source_id).count() == 1
    assert db.query(Product).filter(Product.category_id == source_id).count() == 2
    assert db.query(Product).filter(Product.category_id == target_id).count() == 1


def test_product_repo_update_and_delete(db):
    product = product_repo.create(db, name="Pump", specs=["s"], use_cases=None, images=None)
    assert product.specs == ["s"]
    updated = product_repo.update(db, product.id, name="Big Pump", specs=None, images=["a"])
    assert updated.name == "Big Pump"
    assert updated.images == ["a"]
    assert product_repo.update(db, 9999, name="None") is None
    assert product_repo.delete(db, product.id) is True
    assert product_repo.delete(db, product.id) is False


def test_job_opening_repo_active_filter_and_update(db):
    job = job_opening_repo.create(
        db, title="Driver", location="Baku", type="Part-time", description="Deliveries", active=False
    )
    assert job.id not in [j.id for j in job_opening_repo.get_all(db, active_only=True)]
    assert job_opening_repo.get_all(db)[0].id == job.id

    kept = job_opening_repo.update(db, job.id, title="Driver", location="Ganja", type="Part-time", description="Deliveries")
    assert kept.location == "Ganja"
    assert kept.active is False
    assert job_opening_repo.update(db, 9999, title="x", location="x", type="x", description="x") is None
