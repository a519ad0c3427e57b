# models/order.py
from pydantic import BaseModel
from typing import List, Optional, Union

ORDERS_TABLE = "Commandes"

class OrderCreate(BaseModel):
    idClient: str
    produits: Union[List[str], str]
    quantites: Union[List[Union[int, str]], str] = []
    total: float = 0
    adresseLivraison: str = ""
    moyenPaiement: str = ""
    notes: Optional[str] = ""
