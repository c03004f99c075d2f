"""
Order payload carried by the sample SQS messages
"""

import json
import os
from dataclasses import asdict, dataclass
from typing import List

from cloud_scripts import config


@dataclass
class OrderItem:
    productId: str
    productName: str
    quantity: int
    price: int


@dataclass
class ShippingAddress:
    postalCode: str
    prefecture: str
    city: str
    address: str


@dataclass
class OrderInfo:
    orderId: str
    customerId: str
    customerName: str
    items: List[OrderItem]
    totalAmount: int
    orderDate: str
    shippingAddress: ShippingAddress

    @classmethod
    def from_dict(cls, data):
        """Build from the camelCase JSON shape; missing keys raise KeyError."""
        return cls(
            orderId=data['orderId'],
            customerId=data['customerId'],
            customerName=data['customerName'],
            items=[OrderItem(**item) for item in data['items']],
            totalAmount=data['totalAmount'],
            orderDate=data['orderDate'],
            shippingAddress=ShippingAddress(**data['shippingAddress']),
        )

    @classmethod
    def from_json(cls, body):
        return cls.from_dict(json.loads(body))

    def to_json(self):
        return json.dumps(asdict(self), indent=2, ensure_ascii=False)


def dummy_order():
    return OrderInfo(
        orderId='ORD-20260220-001',
        customerId='CUST-12345',
        customerName='Taro Yamada',
        items=[
            OrderItem('PROD-001', 'Laptop', 1, 120000),
            OrderItem('PROD-002', 'Wireless mouse', 2, 3000),
        ],
        totalAmount=126000,
        orderDate='2026-02-20T10:30:00Z',
        shippingAddress=ShippingAddress('100-0001', 'Tokyo', 'Chiyoda', 'Chiyoda 1-1-1'),
    )


def load_orders(path=None):
    with open(path or os.path.join(config.DATA_DIR, 'order_data.json'), 'r') as f:
        return [OrderInfo.from_dict(o) for o in json.load(f)]
