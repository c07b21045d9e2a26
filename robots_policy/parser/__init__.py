"""robots_policy.parser: Разбор robots.txt и компиляция шаблонов путей."""
