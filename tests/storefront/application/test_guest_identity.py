"""Application tests for guest placeholder provisioning."""

import threading

import pytest
from protean import current_domain
from protean.exceptions import ExpectedVersionError, ValidationError
from sqlalchemy.exc import IntegrityError

from storefront.auth.credentials import ROLE_ADMIN
from storefront.auth.session import ActorIdentity, attribute_owner
from storefront.customer.customer import GUEST_CUSTOMER_ID, GUEST_EMAIL, Customer
from storefront.customer.guest import ensure_guest_identity


def _guest_records():
    return current_domain.repository_for(Customer)._dao.query.filter(email=GUEST_EMAIL).all().items


class TestEnsureGuestIdentity:
    def test_creates_placeholder_on_first_use(self):
        assert ensure_guest_identity() == GUEST_CUSTOMER_ID

        guest = current_domain.repository_for(Customer).get(GUEST_CUSTOMER_ID)
        assert guest.email == GUEST_EMAIL
        assert guest.name == "Guest"

    def test_idempotent(self):
        first = ensure_guest_identity()
        second = ensure_guest_identity()

        assert first == second == GUEST_CUSTOMER_ID
        assert len(_guest_records()) == 1

    def test_concurrent_first_use_creates_one_placeholder(self, storefront_domain):
        barrier = threading.Barrier(4)
        results = []
        errors = []

        def checkout():
            with storefront_domain.domain_context():
                barrier.wait()
                try:
                    results.append(ensure_guest_identity())
                except Exception as exc:
                    errors.append(exc)

        threads = [threading.Thread(target=checkout) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert errors == []
        assert results == [GUEST_CUSTOMER_ID] * 4
        assert len(_guest_records()) == 1

    @pytest.mark.parametrize(
        "error",
        [
            ValidationError({"email": ["Customer with email guest@guest.local is already present."]}),
            ExpectedVersionError("Wrong expected version: -1 (Stream: customer-guest, Stream Version: 0)"),
            IntegrityError("INSERT INTO customer", {}, Exception("duplicate key")),
        ],
    )
    def test_losing_insert_reads_back_the_winner(self, monkeypatch, error):
        repo_class = type(current_domain.repository_for(Customer))
        original_add = repo_class.add

        def add_after_concurrent_winner(self, aggregate):
            original_add(self, Customer.provision_guest())
            raise error

        monkeypatch.setattr(repo_class, "add", add_after_concurrent_winner)

        assert ensure_guest_identity() == GUEST_CUSTOMER_ID
        assert len(_guest_records()) == 1


class TestAttributeOwner:
    def test_guest_actor_gets_placeholder(self):
        assert attribute_owner(ActorIdentity.guest()) == GUEST_CUSTOMER_ID
        assert len(_guest_records()) == 1

    def test_authenticated_actor_owns_order(self):
        assert attribute_owner(ActorIdentity.authenticated("cust-001")) == "cust-001"
        assert _guest_records() == []

    def test_admin_actor_checks_out_as_guest(self):
        admin = ActorIdentity.authenticated("admin", role=ROLE_ADMIN)
        assert attribute_owner(admin) == GUEST_CUSTOMER_ID
