from bulkimport.models.customer import Customer, CustomerContact, CustomerServiceLocation
from bulkimport.models.vehicle import Vehicle
from bulkimport.models.job import Job
from bulkimport.models.invoice import Invoice
from bulkimport.models.audit import AuditLog

__all__ = [
    "Customer", "CustomerContact", "CustomerServiceLocation",
    "Vehicle",
    "Job",
    "Invoice",
    "AuditLog",
]
