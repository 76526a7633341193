"""Contact form backed by Supabase plus a to-do list backed by a JSON file."""
