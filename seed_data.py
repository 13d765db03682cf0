"""
Ornek veri ekleme scripti.

Demo kullanici olusturur ve bu kullanicinin koleksiyonlarina musteri,
faturalayan kisi, kategori, urun, hizmet ve birkac fatura ekler.

Kullanim:
    python seed_data.py
"""
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy.orm import Session

from kolaypanel.database import Base, engine
from kolaypanel.models.user import User
from kolaypanel.schemas.biller import BillerCreate
from kolaypanel.schemas.customer import CustomerCreate
from kolaypanel.schemas.inventory import CategoryCreate, ProductCreate, ServiceCreate
from kolaypanel.schemas.user import AuthContext
from kolaypanel.services import biller as biller_service
from kolaypanel.services import customer as customer_service
from kolaypanel.services import inventory as inventory_service
from kolaypanel.services import invoice_draft as draft_service
from kolaypanel.services.auth import hash_password
from kolaypanel.services.catalog import load_catalog
from kolaypanel.services.documents import DocumentStore
from kolaypanel.services.invoice import submit_invoice

Base.metadata.create_all(bind=engine)

with Session(engine) as db:
    # 1. Demo kullanici
    user = User(
        email="demo@kolaypanel.com",
        hashed_password=hash_password("demo12345"),
        full_name="Demo Kullanici",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    print("Kullanici olusturuldu: demo@kolaypanel.com / demo12345")

    store = DocumentStore(db, user.id)
    ctx = AuthContext(user_id=user.id, email=user.email, full_name=user.full_name)

    # 2. Musteriler
    customers_data = [
        ("Ahmet", "Yildiz", "ahmet@yildiztek.com", "0532 111 2233", "Istanbul"),
        ("Fatma", "Ay", "fatma@aygida.com", "0534 333 4455", "Izmir"),
        ("Can", "Bulut", "can@bulutyazilim.com", "0537 666 7788", "Ankara"),
        ("Elif", "Dere", "elif@dereoto.com", "0538 777 8899", "Kocaeli"),
    ]
    customers = [
        customer_service.create_customer(
            store,
            CustomerCreate(
                first_name=first, last_name=last, contact_type="both",
                email=email, phone=phone, city=city, country="Turkiye",
            ),
        )
        for first, last, email, phone, city in customers_data
    ]
    print(f"{len(customers)} musteri eklendi")

    # 3. Faturalayan kisi
    biller = biller_service.create_biller(
        store,
        BillerCreate(
            name="Demo Kullanici", company="KolayPanel Demo Ltd.",
            email="fatura@kolaypanel.com", city="Istanbul", country="Turkiye",
        ),
    )

    # 4. Kategoriler, urunler, hizmetler
    product_category = inventory_service.create_category(store, "product", CategoryCreate(name="Donanim"))
    service_category = inventory_service.create_category(store, "service", CategoryCreate(name="Danismanlik"))

    products_data = [
        ("Laptop", "15 inc is laptopu", 12, "25000", "32000"),
        ("Monitor", "27 inc IPS monitor", 20, "6000", "8500"),
        ("Klavye", "Mekanik klavye", 50, "900", "1400"),
    ]
    for name, description, quantity, purchase, selling in products_data:
        inventory_service.create_product(
            store,
            ProductCreate(
                name=name, description=description, category=product_category["id"],
                quantity=quantity, purchase_price=Decimal(purchase),
                selling_price=Decimal(selling), tax=Decimal("18"),
            ),
        )

    services_data = [
        ("Kurulum", "Yerinde kurulum hizmeti", "1500"),
        ("Yillik Bakim", "12 aylik bakim sozlesmesi", "12000"),
    ]
    for name, description, cost in services_data:
        inventory_service.create_service(
            store,
            ServiceCreate(
                name=name, description=description,
                category=service_category["id"], cost=Decimal(cost),
            ),
        )
    print(f"{len(products_data)} urun, {len(services_data)} hizmet eklendi")

    # 5. Ornek faturalar (her musteriye bir tane)
    catalog = load_catalog(store)
    product_ids = list(catalog.products)
    service_ids = list(catalog.services)
    for i, customer in enumerate(customers):
        draft = draft_service.new_draft()
        draft.customer_id = customer["id"]
        draft.biller_id = biller["id"]
        draft.invoice_date = date.today() - timedelta(days=10 * i)
        draft.due_date = draft.invoice_date + timedelta(days=30)
        draft_service.select_catalog_entry(draft, 0, product_ids[i % len(product_ids)], catalog)
        draft_service.set_quantity(draft, 0, i + 1)
        draft_service.add_item(draft, "service")
        draft_service.select_catalog_entry(draft, 1, service_ids[i % len(service_ids)], catalog)
        if i % 2 == 0:
            draft.payment_status = "Paid"
        submit_invoice(store, draft, ctx)
    print(f"{len(customers)} fatura eklendi")
