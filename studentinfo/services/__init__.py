# Services package init
"""
StudentInfo API — Services Layer
=================================

What:  Data-access layer sitting between routes (HTTP) and the database.
How:   Services receive the request's AsyncSession from the route, issue one
       parameterized statement per call, and translate driver failures into
       application exceptions.

Service Inventory:
    - StudentService: list / insert / get / update / delete on `studentinfo`
"""
