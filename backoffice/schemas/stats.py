from pydantic import BaseModel


class DashboardStatsResponse(BaseModel):
    totalRevenue: float
    totalOrders: int
    totalCustomers: int
    totalProducts: int
    lowStock: int
