"""Jadro: doska, pravidlá kladenia, slová, skórovanie a stav partie (bez UI)."""
