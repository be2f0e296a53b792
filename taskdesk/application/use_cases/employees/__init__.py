"""Employee (profile) use cases."""

from taskdesk.application.use_cases.employees.employee_operations import EmployeeService

__all__ = ["EmployeeService"]
