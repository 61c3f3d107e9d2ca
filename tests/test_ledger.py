"""Upvote and report ledger tests."""
import uuid

import pytest
from sqlalchemy import create_engine, event, func
from sqlalchemy.orm import sessionmaker

from techelevate.db import Base, enable_sqlite_foreign_keys
from techelevate.models.product import Product, ProductVote, ProductReport
from techelevate.services.errors import AlreadyActed, ProductNotFound, SelfInteractionForbidden
from techelevate.services.ledger import cast_upvote, file_report


def ledger_sizes(db, product_id):
    votes = db.query(func.count(ProductVote.id)).filter(ProductVote.product_id == product_id).scalar()
    reports = db.query(func.count(ProductReport.id)).filter(ProductReport.product_id == product_id).scalar()
    return votes, reports


@pytest.fixture
def two_sessions(tmp_path):
    """Two independent sessions on a file-backed database."""
    engine = create_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    first, second = Session(), Session()
    try:
        yield first, second
    finally:
        first.close()
        second.close()
        engine.dispose()


def seed_product(db):
    product = Product(owner_email="alice@x.com", product_name="Widget", tags=[])
    db.add(product)
    db.commit()
    return product.id


class TestUpvote:
    """Test cast_upvote."""

    def test_upvote_success(self, db_session, alice_product, bob):
        """Test a first upvote increments the counter and records the voter."""
        product = cast_upvote(db_session, alice_product.id, bob.email)

        assert product.upvotes == 1
        assert product.voters == [bob.email]

    def test_second_upvote_rejected(self, db_session, alice_product, bob):
        """Test a repeat upvote fails and leaves the counter unchanged."""
        cast_upvote(db_session, alice_product.id, bob.email)

        with pytest.raises(AlreadyActed, match="only vote once"):
            cast_upvote(db_session, alice_product.id, bob.email)

        db_session.refresh(alice_product)
        assert alice_product.upvotes == 1
        assert ledger_sizes(db_session, alice_product.id) == (1, 0)

    def test_owner_cannot_upvote(self, db_session, alice_product, alice):
        """Test the owner is always refused."""
        with pytest.raises(SelfInteractionForbidden):
            cast_upvote(db_session, alice_product.id, alice.email)

        db_session.refresh(alice_product)
        assert alice_product.upvotes == 0
        assert alice.email not in alice_product.voters

    def test_owner_refused_after_other_votes(self, db_session, alice_product, alice, bob):
        """Test self-vote is refused regardless of prior state."""
        cast_upvote(db_session, alice_product.id, bob.email)
        cast_upvote(db_session, alice_product.id, "carol@x.com")

        with pytest.raises(SelfInteractionForbidden):
            cast_upvote(db_session, alice_product.id, alice.email)

        db_session.refresh(alice_product)
        assert alice_product.upvotes == 2

    def test_upvote_missing_product(self, db_session, bob):
        """Test upvoting an unknown product fails with not found."""
        with pytest.raises(ProductNotFound):
            cast_upvote(db_session, uuid.uuid4(), bob.email)

    def test_votes_do_not_leak_between_products(self, db_session, make_product, alice, bob):
        """Test the same principal can vote once on each product."""
        first = make_product(alice.email)
        second = make_product(alice.email)

        cast_upvote(db_session, first.id, bob.email)
        product = cast_upvote(db_session, second.id, bob.email)

        assert product.upvotes == 1


class TestReport:
    """Test file_report."""

    def test_report_success(self, db_session, alice_product, bob):
        """Test a first report increments the counter and records the reporter."""
        product = file_report(db_session, alice_product.id, bob.email)

        assert product.reports == 1
        assert product.reported_by == [bob.email]
        assert product.upvotes == 0

    def test_second_report_rejected(self, db_session, alice_product, bob):
        """Test a repeat report fails and leaves the counter unchanged."""
        file_report(db_session, alice_product.id, bob.email)

        with pytest.raises(AlreadyActed, match="already reported"):
            file_report(db_session, alice_product.id, bob.email)

        db_session.refresh(alice_product)
        assert alice_product.reports == 1

    def test_owner_cannot_report(self, db_session, alice_product, alice):
        """Test the owner cannot report their own product."""
        with pytest.raises(SelfInteractionForbidden, match="report your own"):
            file_report(db_session, alice_product.id, alice.email)

    def test_report_missing_product(self, db_session, bob):
        """Test reporting an unknown product fails with not found."""
        with pytest.raises(ProductNotFound):
            file_report(db_session, uuid.uuid4(), bob.email)

    def test_vote_and_report_are_independent(self, db_session, alice_product, bob):
        """Test one principal may both upvote and report."""
        cast_upvote(db_session, alice_product.id, bob.email)
        product = file_report(db_session, alice_product.id, bob.email)

        assert product.upvotes == 1
        assert product.reports == 1


class TestLedgerInvariant:
    """Counters always match ledger sizes."""

    def test_counters_match_ledgers_after_mixed_sequence(self, db_session, alice_product, alice):
        """Test upvotes == |voters| and reports == |reported_by| after many attempts."""
        principals = ["u1@x.com", "u2@x.com", "u3@x.com", alice.email]
        actions = [cast_upvote, file_report]

        for _ in range(2):
            for principal in principals:
                for action in actions:
                    try:
                        action(db_session, alice_product.id, principal)
                    except (AlreadyActed, SelfInteractionForbidden):
                        pass

        db_session.refresh(alice_product)
        assert alice_product.upvotes == len(alice_product.voters) == 3
        assert alice_product.reports == len(alice_product.reported_by) == 3
        assert ledger_sizes(db_session, alice_product.id) == (3, 3)
        assert alice.email not in alice_product.voters
        assert alice.email not in alice_product.reported_by


class TestConcurrentLedger:
    """Another request commits between this request's read and its write."""

    def test_concurrent_duplicate_upvote(self, two_sessions):
        """Test two upvotes racing from one principal count once."""
        first, second = two_sessions
        product_id = seed_product(first)

        def upvote_from_first(session, flush_context, instances):
            cast_upvote(first, product_id, "bob@x.com")

        event.listen(second, "before_flush", upvote_from_first, once=True)

        with pytest.raises(AlreadyActed, match="only vote once"):
            cast_upvote(second, product_id, "bob@x.com")

        first.expire_all()
        product = first.get(Product, product_id)
        assert product.upvotes == 1
        assert ledger_sizes(first, product_id) == (1, 0)

        # Neither session drifts afterwards
        product = cast_upvote(second, product_id, "carol@x.com")
        assert product.upvotes == 2
        assert ledger_sizes(second, product_id) == (2, 0)

    def test_concurrent_duplicate_report(self, two_sessions):
        first, second = two_sessions
        product_id = seed_product(first)

        def report_from_first(session, flush_context, instances):
            file_report(first, product_id, "bob@x.com")

        event.listen(second, "before_flush", report_from_first, once=True)

        with pytest.raises(AlreadyActed, match="already reported"):
            file_report(second, product_id, "bob@x.com")

        assert ledger_sizes(second, product_id) == (0, 1)
        assert second.get(Product, product_id).reports == 1

    def test_product_deleted_before_vote_is_written(self, two_sessions):
        """Test a product deleted mid-request is reported as not found."""
        first, second = two_sessions
        product_id = seed_product(first)

        def delete_from_first(session, flush_context, instances):
            first.delete(first.get(Product, product_id))
            first.commit()

        event.listen(second, "before_flush", delete_from_first, once=True)

        with pytest.raises(ProductNotFound):
            cast_upvote(second, product_id, "bob@x.com")

        assert ledger_sizes(second, product_id) == (0, 0)
