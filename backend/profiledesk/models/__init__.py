# Models package init
"""
ProfileDesk Backend — ORM Models
=================================

    - account.py: Account (signup/login credentials)
    - profile.py: Profile (contact fields + embedded image)
    - member.py:  Member (directory entry)
"""
