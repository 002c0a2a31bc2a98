"""Blog Publishing API."""
